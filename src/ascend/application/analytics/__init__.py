# Application Analytics Package
from .engine import AnalyticsEngine, bucket_key
from .service import AnalyticsService

__all__ = ["AnalyticsEngine", "AnalyticsService", "bucket_key"]
