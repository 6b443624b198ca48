"""Notifications app package.

In-app notifications shown to members, yacht owners and club admins.
They are created by Celery tasks reacting to booking and payment events
and are marked as read by their recipient.
"""
