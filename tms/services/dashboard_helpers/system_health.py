# /tms/services/dashboard_helpers/system_health.py

"""Placeholder system-health block for the admin dashboard."""

from ...models.dashboard_model import (
    ApiHealth,
    CpuHealth,
    DatabaseHealth,
    MemoryHealth,
    ServiceHealth,
    SystemHealth,
)

_GIB = 1024 * 1024 * 1024


def placeholder_system_health() -> SystemHealth:
    """
    Fixed system-health figures for the admin dashboard. Nothing here is
    measured; the returned block is marked `synthetic`.
    """
    # TODO: replace with readings from the monitoring stack once it exposes an API.
    return SystemHealth(
        synthetic=True,
        database=DatabaseHealth(status="healthy", connections=12, maxConnections=100),
        api=ApiHealth(status="healthy", responseTime=145, requestsPerMinute=1250, errorRate=0.02),
        memory=MemoryHealth(used=int(2.3 * _GIB), total=8 * _GIB, percentage=28.75),
        cpu=CpuHealth(usage=35, cores=4),
        services=[
            ServiceHealth(name="Database", status="healthy", uptime=99.9),
            ServiceHealth(name="API Server", status="healthy", uptime=99.8),
            ServiceHealth(name="File Storage", status="healthy", uptime=99.9),
            ServiceHealth(name="Email Service", status="healthy", uptime=99.7),
        ],
    )
