"""Read-only account directory: profiles and organization linkage records."""

from notify_service.features.accounts.models import PatientAccount, PracticeAccount, Profile

__all__ = ["PatientAccount", "PracticeAccount", "Profile"]
