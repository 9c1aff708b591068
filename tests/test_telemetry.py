from __future__ import annotations

import pytest

from sheet_engine.runtime import telemetry


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.build_config("loud")


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=telemetry.build_config(), preset="development")


def test_env_flag_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHEET_ENGINE_LOG_JSON", "yes")
    monkeypatch.delenv("SHEET_ENGINE_NO_COLOR", raising=False)

    assert telemetry.env_flag("LOG_JSON") is True
    assert telemetry.env_flag("NO_COLOR") is False
    assert telemetry.env_flag("NO_COLOR", True) is True


def test_span_reraises_and_keeps_working() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::boom", component=True, metadata={"k": 1}):
            raise RuntimeError("boom")

    with telemetry.span("test::ok") as handle:
        handle.add_metadata("rows", 3)
    assert handle.metadata["rows"] == "3"
