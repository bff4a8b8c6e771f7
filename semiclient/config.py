"""Client configuration."""

from dataclasses import dataclass, field

from .beacons import DEFAULT_BEACON_TEMPLATE, BeaconFormat
from .exceptions import UsageError

API_PREFIX = "/v1"
SCHEMES = ("http", "https")


@dataclass
class ClientConfig:
    """Connection settings.

    Args:
        scheme: "http" or "https".
        host: Host with optional port (e.g., "localhost:8080").
        timeout: Request timeout in seconds.
        headers: Extra headers sent with every request.
        beacon_template: Template used to render reference beacons.
    """

    scheme: str = "http"
    host: str = ""
    timeout: float = 30.0
    headers: dict[str, str] = field(default_factory=dict)
    beacon_template: str = DEFAULT_BEACON_TEMPLATE

    def __post_init__(self) -> None:
        errors = []
        if self.scheme not in SCHEMES:
            errors.append(f"scheme must be one of {', '.join(SCHEMES)}, got {self.scheme!r}")
        if not self.host:
            errors.append("host must be set")
        if errors:
            raise UsageError(*errors)
        self.host = self.host.rstrip("/")

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}{API_PREFIX}"

    @property
    def beacon_format(self) -> BeaconFormat:
        return BeaconFormat(self.beacon_template)
