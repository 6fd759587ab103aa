# -*- coding: utf-8 -*-
"""Utilities for member streams."""

from .queues import MemberQueue, QueueClosed, QueueItem, pump

__all__ = ['MemberQueue', 'QueueClosed', 'QueueItem', 'pump']
