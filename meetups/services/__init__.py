"""
Meetups Backend: Services Layer
==================================

What:  Business logic between callers (HTTP layer, scripts) and the database.
How:   Services accept a session plus validated schemas, apply the rules,
       and return response schemas.

Service Inventory:
    - MeetupService: meetup CRUD, agenda replacement, attendance, viewer flags
"""

from meetups.services.meetup_service import MeetupService, meetup_service

__all__ = ["MeetupService", "meetup_service"]
