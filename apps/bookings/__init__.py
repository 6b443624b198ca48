"""Bookings app package.

Members book a club yacht for one of four fixed daily slots. The app
holds the slot catalog, the availability checker and the booking
service, which relies on a conditional unique constraint so a slot can
only ever hold one confirmed booking.
"""
