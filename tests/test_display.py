"""Tests for backend selection and the display adjuster."""

import pytest

from sunshift.display import (
    AdjustmentFailedError,
    BackendUnavailableError,
    DisplayAdjuster,
    DisplayBackend,
    backend_order,
    create_backends,
)
from sunshift.mock_hardware import MockDisplayBackend
from sunshift.models import FallbackPolicy, GammaTriple
from sunshift.randr import RandrBackend
from sunshift.vidmode import VidModeBackend


class TestBackendOrder:
    """Tests for backend selection under each fallback policy."""

    @pytest.mark.parametrize("policy", list(FallbackPolicy))
    def test_no_method_starts_with_randr(self, policy):
        """RANDR is the primary backend when nothing was requested."""
        assert backend_order(None, policy)[0] == "randr"

    def test_auto_without_method_falls_back(self):
        """AUTO falls back to VidMode when no method was requested."""
        assert backend_order(None, FallbackPolicy.AUTO) == ["randr", "vidmode"]

    def test_auto_with_method_does_not_fall_back(self):
        """AUTO honors an explicit method without fallback."""
        assert backend_order("randr", FallbackPolicy.AUTO) == ["randr"]
        assert backend_order("vidmode", FallbackPolicy.AUTO) == ["vidmode"]

    def test_never(self):
        """NEVER uses a single backend."""
        assert backend_order(None, FallbackPolicy.NEVER) == ["randr"]
        assert backend_order("vidmode", FallbackPolicy.NEVER) == ["vidmode"]

    def test_always(self):
        """ALWAYS appends VidMode even when RANDR was requested explicitly."""
        assert backend_order("randr", FallbackPolicy.ALWAYS) == ["randr", "vidmode"]

    @pytest.mark.parametrize("policy", list(FallbackPolicy))
    def test_vidmode_never_falls_back_to_randr(self, policy):
        """An explicit VidMode selection is used alone under every policy."""
        assert backend_order("vidmode", policy) == ["vidmode"]


class TestCreateBackends:
    """Tests for backend instantiation."""

    def test_mock_mode(self):
        """Mock mode returns a single mock backend."""
        backends = create_backends("randr", FallbackPolicy.ALWAYS, mock=True)
        assert len(backends) == 1
        assert isinstance(backends[0], MockDisplayBackend)

    def test_real_backends(self):
        """Real mode instantiates the backends in order."""
        backends = create_backends(None, FallbackPolicy.AUTO)
        assert [type(b) for b in backends] == [RandrBackend, VidModeBackend]

    def test_explicit_vidmode(self):
        """An explicit method picks that backend."""
        backends = create_backends("vidmode", FallbackPolicy.NEVER)
        assert [b.name for b in backends] == ["VidMode"]


class TestDisplayBackendInterface:
    """Tests for the abstract backend."""

    def test_not_implemented(self):
        """Base class methods must be overridden."""
        backend = DisplayBackend()
        with pytest.raises(NotImplementedError):
            backend.check_extension()
        with pytest.raises(NotImplementedError):
            backend.set_temperature(None, 6500, GammaTriple())


class TestDisplayAdjuster:
    """Tests for DisplayAdjuster."""

    def test_requires_backend(self):
        """Should reject an empty backend chain."""
        with pytest.raises(ValueError):
            DisplayAdjuster([])

    def test_apply_primary(self, adjuster, mock_backend):
        """Should apply through the first backend."""
        name = adjuster.apply(4500, GammaTriple())

        assert name == "Mock"
        assert mock_backend.temperatures == [4500]

    def test_passes_screen(self):
        """Should pass the configured screen to the backend."""
        backend = MockDisplayBackend()
        DisplayAdjuster([backend], screen=1).apply(4500, GammaTriple())
        assert backend.adjustments[0].screen == 1

    def test_records_gamma(self, adjuster, mock_backend):
        """Should pass the user gamma through."""
        adjuster.apply(6500, GammaTriple(red=0.9, green=1.0, blue=1.1))
        assert mock_backend.adjustments[0].gamma == (0.9, 1.0, 1.1)

    def test_falls_back_when_unavailable(self):
        """Unavailable primary falls through to the secondary."""
        primary = MockDisplayBackend(name="A", available=False)
        secondary = MockDisplayBackend(name="B")
        adjuster = DisplayAdjuster([primary, secondary])

        assert adjuster.apply(5000, GammaTriple()) == "B"
        assert primary.adjustments == []
        assert secondary.temperatures == [5000]

    def test_falls_back_when_set_fails(self):
        """A failing set operation falls through to the secondary."""
        primary = MockDisplayBackend(name="A", fail=True)
        secondary = MockDisplayBackend(name="B")
        adjuster = DisplayAdjuster([primary, secondary])

        assert adjuster.apply(5000, GammaTriple()) == "B"

    def test_set_failure_retried_next_call(self):
        """A set failure does not disable the backend for later calls."""
        primary = MockDisplayBackend(name="A", fail=True)
        secondary = MockDisplayBackend(name="B")
        adjuster = DisplayAdjuster([primary, secondary])

        adjuster.apply(5000, GammaTriple())
        primary.fail = False

        assert adjuster.apply(5100, GammaTriple()) == "A"
        assert primary.temperatures == [5100]

    def test_extension_checked_once(self):
        """Extension availability is checked once per backend."""
        primary = MockDisplayBackend(name="A", available=False)
        secondary = MockDisplayBackend(name="B")
        adjuster = DisplayAdjuster([primary, secondary])

        for temp in (4000, 4100, 4200):
            adjuster.apply(temp, GammaTriple())

        assert primary.check_calls == 1
        assert secondary.check_calls == 1
        assert secondary.temperatures == [4000, 4100, 4200]

    def test_unavailable_logged_once(self, log):
        """Missing extension is reported only the first time."""
        adjuster = DisplayAdjuster([
            MockDisplayBackend(name="A", available=False),
            MockDisplayBackend(name="B"),
        ])

        adjuster.apply(4000, GammaTriple())
        adjuster.apply(4100, GammaTriple())

        messages = [r.getMessage() for r in log.records]
        assert messages.count("A extension is not available.") == 1

    def test_all_fail(self):
        """Should raise when every backend fails, chaining the last error."""
        adjuster = DisplayAdjuster([
            MockDisplayBackend(name="A", fail=True),
            MockDisplayBackend(name="B", fail=True),
        ])

        with pytest.raises(AdjustmentFailedError) as exc_info:
            adjuster.apply(4000, GammaTriple())

        assert str(exc_info.value) == "Color temperature adjustment failed."
        assert isinstance(exc_info.value.__cause__, AdjustmentFailedError)
        assert "B" in str(exc_info.value.__cause__)

    def test_all_unavailable(self):
        """Should raise when no backend is available."""
        adjuster = DisplayAdjuster([MockDisplayBackend(available=False)])

        with pytest.raises(AdjustmentFailedError) as exc_info:
            adjuster.apply(4000, GammaTriple())

        assert isinstance(exc_info.value.__cause__, BackendUnavailableError)

    def test_no_fallback_single_backend(self):
        """A single failing backend is not retried with another."""
        backend = MockDisplayBackend(fail=True)
        adjuster = DisplayAdjuster([backend])

        with pytest.raises(AdjustmentFailedError):
            adjuster.apply(4000, GammaTriple())
        assert backend.adjustments == []
