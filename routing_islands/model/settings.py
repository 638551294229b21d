"""DetectionSettings - Runtime configuration shared by every pass.

Loaded once before the first pass and passed into the detector. The
severity table may be changed between passes (set_error_level) but is only
read while a pass runs.
"""

from dataclasses import dataclass, field

from routing_islands.constants import ErrorCode, ValidationConfig
from routing_islands.model.finding import Severity


def _default_severities() -> dict[int, Severity]:
    return {
        ErrorCode.ROUTING_ISLAND: Severity.OTHER,
        ErrorCode.LONELY_WAY: Severity.ERROR,
    }


@dataclass
class DetectionSettings:
    """Runtime settings for the routing island detector.

    Attributes:
        max_iterations: Cap for every bounded fixpoint loop
        severities: Severity per error code
        amenity_outside_connections: Treat parking/ferry amenity vertices as
            connections to the outside world when seeding

    Example:
        settings = DetectionSettings(max_iterations=50)
        settings.set_error_level(ErrorCode.ROUTING_ISLAND, Severity.WARNING)
    """

    max_iterations: int = ValidationConfig.MAX_ITERATIONS
    severities: dict[int, Severity] = field(default_factory=_default_severities)
    amenity_outside_connections: bool = False

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")
        for code in self.severities:
            self._check_code(code)

    @staticmethod
    def _check_code(code: int) -> None:
        if code not in set(ErrorCode):
            raise ValueError(f"Unknown error code {code}")

    def get_error_level(self, code: int) -> Severity:
        """Get the severity for an error code."""
        self._check_code(code)
        return self.severities.get(code, _default_severities()[code])

    def set_error_level(self, code: int, severity: Severity) -> None:
        """Override the severity for an error code."""
        self._check_code(code)
        self.severities[code] = severity
