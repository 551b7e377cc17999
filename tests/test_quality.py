from halfspace.quality import range_checks


def test_values_inside_default_range_pass():
    assert range_checks({"a": 0.0, "b": 1.0, "c": 0.5}) == []


def test_out_of_range_and_non_finite():
    issues = range_checks({"a": 1.5, "b": float("nan"), "c": float("-inf")})
    checks = sorted(check for check, _ in issues)
    assert checks == ["finite", "finite", "range"]


def test_configured_limits_are_used():
    limits = {"temp": (-20.0, 80.0)}
    assert range_checks({"temp": 25.0}, limits) == []
    issues = range_checks({"temp": 90.0, "other": 0.5}, limits)
    assert len(issues) == 1
    assert issues[0][0] == "range"
    assert "temp" in issues[0][1]
