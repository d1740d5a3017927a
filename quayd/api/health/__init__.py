"""Health probe resources for container liveness and readiness checks."""
