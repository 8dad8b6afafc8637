"""
recommendation.py
-----------------
"Recommend the best slot": a short list of bookable slots that spreads
work across staff.

Ranking:
- fewer same-day bookings for the slot's staff member ranks first
- earlier start time breaks ties
- remaining ties keep the engine's order (staff name)

When re-scheduling, pass exclude_booking_id so the booking being moved does
not count against its own staff member.
"""

import logging

from ..models import Booking
from .availability_engine import AvailabilityEngine, slot_sort_key
from .slot_utils import coerce_date

logger = logging.getLogger(__name__)

# Everything except cancelled bookings counts toward a staff member's load
LOAD_STATUSES = tuple(s for s in Booking.Status.values if s != Booking.Status.CANCELLED)


class RecommendationRanker:
    def __init__(self, engine: AvailabilityEngine | None = None):
        self.engine = engine or AvailabilityEngine()

    def get_recommended_slots(self, business_id, service_id, date, exclude_booking_id=None):
        """
        Returns:
            list[CandidateSlot]: at most config.recommendation_limit slots,
            all available, best first.
        """
        slots = [
            s for s in self.engine.get_available_slots(business_id, date, service_id)
            if s.available
        ]
        if not slots:
            return []

        day = coerce_date(date)
        load = self.engine.repository.count_staff_bookings(
            business_id,
            day,
            LOAD_STATUSES,
            exclude_booking_id=exclude_booking_id,
            tz=self.engine.config.tzinfo,
        )

        # sorted() is stable, so equal keys keep the engine's name ordering
        ranked = sorted(slots, key=lambda s: (load.get(s.staff_id, 0), slot_sort_key(s)[0]))
        limit = self.engine.config.recommendation_limit
        logger.debug("Recommending %d of %d slots; staff load %s", min(limit, len(ranked)), len(ranked), load)
        return ranked[:limit]
