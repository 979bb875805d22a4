from functools import lru_cache

from barrage.services.stress.stress_service import StressService

@lru_cache()
def get_stress_service() -> StressService:
    return StressService()
