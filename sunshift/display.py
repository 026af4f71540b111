"""
Display adjustment abstraction.

Features:
- Common interface for display backends (check_extension, set_temperature)
- Distinct errors for "extension unavailable" and "set operation failed"
- Backend selection with an explicit fallback policy
- Extension check performed once per backend
"""

from typing import Optional

from sunshift.models import FallbackPolicy
from sunshift.logger import logger

METHODS = ("randr", "vidmode")


class DisplayAdjustmentError(Exception):
    """Base class for display backend failures."""


class BackendUnavailableError(DisplayAdjustmentError):
    """The display server lacks the extension a backend needs."""


class AdjustmentFailedError(DisplayAdjustmentError):
    """The backend could not apply the color temperature."""


class DisplayBackend:
    """
    Interface implemented by every display backend.

    Subclasses raise BackendUnavailableError from check_extension() and
    AdjustmentFailedError from set_temperature().
    """

    name = "display"

    def check_extension(self) -> None:
        raise NotImplementedError

    def set_temperature(self, screen: Optional[int], temperature: int, gamma) -> None:
        raise NotImplementedError


def backend_order(method: Optional[str], policy: FallbackPolicy) -> list[str]:
    """
    Names of the backends to try, in order.

    Args:
        method: Explicitly requested method, or None
        policy: Fallback policy

    Returns:
        List of backend names ("randr", "vidmode")
    """
    primary = method or METHODS[0]

    # Fallback only ever goes from RANDR to VidMode
    if primary != "randr":
        return [primary]
    if policy == FallbackPolicy.ALWAYS:
        return [primary, "vidmode"]
    if policy == FallbackPolicy.AUTO and method is None:
        return [primary, "vidmode"]
    return [primary]


def create_backends(method: Optional[str], policy: FallbackPolicy, mock: bool = False) -> list[DisplayBackend]:
    """Instantiate the backend chain for the given selection."""
    if mock:
        from sunshift.mock_hardware import MockDisplayBackend
        logger.info("MOCK MODE ENABLED - Using simulated display")
        return [MockDisplayBackend()]

    from sunshift.randr import RandrBackend
    from sunshift.vidmode import VidModeBackend

    factories = {"randr": RandrBackend, "vidmode": VidModeBackend}
    return [factories[name]() for name in backend_order(method, policy)]


class DisplayAdjuster:
    """
    Applies color temperature through a chain of backends.

    The first backend whose extension is available and whose set operation
    succeeds wins. Once a backend's extension check has failed it is skipped
    on later calls.
    """

    def __init__(self, backends: list[DisplayBackend], screen: Optional[int] = None):
        if not backends:
            raise ValueError("At least one display backend required")
        self.backends = backends
        self.screen = screen
        self._available: dict[int, bool] = {}

    def _check(self, index: int, backend: DisplayBackend) -> bool:
        """Run the extension check once, remembering the outcome."""
        if index in self._available:
            return self._available[index]

        try:
            backend.check_extension()
        except BackendUnavailableError as e:
            logger.error(f"{e}")
            self._available[index] = False
            return False

        self._available[index] = True
        return True

    def apply(self, temperature: int, gamma) -> str:
        """
        Set the color temperature.

        Args:
            temperature: Color temperature in Kelvin
            gamma: GammaTriple applied on top of the temperature

        Returns:
            Name of the backend that applied the setting

        Raises:
            AdjustmentFailedError: If every backend in the chain failed
        """
        last_error: Optional[DisplayAdjustmentError] = None

        for index, backend in enumerate(self.backends):
            if not self._check(index, backend):
                last_error = BackendUnavailableError(f"{backend.name} extension is not available.")
                continue

            try:
                backend.set_temperature(self.screen, temperature, gamma)
            except DisplayAdjustmentError as e:
                logger.error(f"Unable to set color temperature with {backend.name}: {e}")
                last_error = e
                continue

            return backend.name

        raise AdjustmentFailedError("Color temperature adjustment failed.") from last_error
