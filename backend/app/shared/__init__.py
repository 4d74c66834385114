"""
Shared utilities (NOT business logic).

Usage:
    from app.shared.geo import haversine
    from app.shared.elevation import compute_elevation_stats
    from app.shared.resampling import downsample, interpolate
"""
