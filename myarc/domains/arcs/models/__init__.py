from myarc.domains.arcs.models.daily_arc import DailyArc

__all__ = ["DailyArc"]
