from core.models import NormalizedState


def blend(a: NormalizedState, b: NormalizedState) -> NormalizedState:
    """
    Average two states channel by channel (origin/destination route weather).
    Direction is averaged with integer floor division.
    """
    return NormalizedState(
        wind_dir_deg=(a.wind_dir_deg + b.wind_dir_deg) // 2,
        wind_strength=(a.wind_strength + b.wind_strength) / 2,
        visibility=(a.visibility + b.visibility) / 2,
        cloud_height=(a.cloud_height + b.cloud_height) / 2,
        cloud_density=(a.cloud_density + b.cloud_density) / 2,
        turbulence=(a.turbulence + b.turbulence) / 2,
        cirrus_density=(a.cirrus_density + b.cirrus_density) / 2,
        cirrus_height=(a.cirrus_height + b.cirrus_height) / 2,
        thermal_activity=(a.thermal_activity + b.thermal_activity) / 2,
    )
