"""
Filter Design Model Tests
"""

import pytest


class TestFilterType:
    """Tests for FilterType lookup."""

    @pytest.mark.parametrize("name, expected", [
        ("low_pass", "LOW_PASS"),
        ("LowPass", "LOW_PASS"),
        ("high-pass", "HIGH_PASS"),
        ("Band Pass", "BAND_PASS"),
        ("bandreject", "BAND_REJECT"),
        ("  ALL_PASS ", "ALL_PASS"),
    ])
    def test_from_name(self, name, expected):
        """Test name normalization."""
        from models.filter_design import FilterType

        assert FilterType.from_name(name) is FilterType[expected]

    def test_unknown_name(self):
        from models.filter_design import FilterType

        assert FilterType.from_name("peaking") is None


class TestBiquadCoefficients:
    """Tests for the coefficient snapshot."""

    def test_identity(self):
        from models.filter_design import BiquadCoefficients

        identity = BiquadCoefficients.identity()
        assert identity.b == (1.0, 0.0, 0.0)
        assert identity.a == (1.0, 0.0, 0.0)

    def test_a0_is_not_a_field(self):
        """a0 cannot be passed in or assigned."""
        from models.filter_design import BiquadCoefficients

        with pytest.raises(TypeError):
            BiquadCoefficients(a0=2.0)
        assert BiquadCoefficients(0.1, 0.2, 0.3, 0.4, 0.5).a == (1.0, 0.4, 0.5)


class TestDesignResult:
    """Tests for DesignResult."""

    def test_truthiness(self):
        from models.filter_design import DesignResult

        assert DesignResult.success()
        assert not DesignResult.failure("bad radius")
        assert DesignResult.failure("bad radius").message == "bad radius"


class TestDiagnostic:
    """Tests for Diagnostic and Severity."""

    def test_log_levels(self):
        import logging

        from models.diagnostic import Severity

        assert Severity.WARNING.log_level == logging.WARNING
        assert Severity.ERROR.log_level == logging.ERROR
        assert Severity.INFO.log_level == logging.INFO

    def test_str(self):
        from models.diagnostic import Diagnostic, Severity

        assert str(Diagnostic(Severity.WARNING, "stale")) == "[warning] stale"
