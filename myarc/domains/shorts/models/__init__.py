from myarc.domains.shorts.models.short_models import Milestone, Short

__all__ = ["Milestone", "Short"]
