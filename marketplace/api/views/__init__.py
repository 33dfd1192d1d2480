from .prometheus_metrics import prometheus_metrics
from .service_errors import ERROR_STATUS, error_response


__all__ = ["ERROR_STATUS", "error_response", "prometheus_metrics"]
