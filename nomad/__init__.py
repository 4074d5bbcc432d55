"""
Nomad: travel assistance backend for digital nomads.

This package contains:
- shared/: Common infrastructure (settings, LLM client, logging, contracts)
- booking/: Booking orchestrator (accommodation + optional flight pipeline)
- advisor/: Classify-then-answer travel advisor chat
- flights/: Flight search and airport autocomplete with mock fallback
- payments/: Store checkout sessions and payment webhooks
"""

from nomad.booking.orchestrator import BookingOrchestrator

__all__ = ["BookingOrchestrator"]
