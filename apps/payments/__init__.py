"""Payments app package.

Members pay for add-on club services through Stripe. Yacht rental itself
is free for members, so a failed payment never affects a booking.
"""
