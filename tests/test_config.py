"""Tests for routeguard.config — PipelineConfig frozen dataclass."""

import pytest

from routeguard.config import DEFAULT_CONFIG, PipelineConfig, ResponseValidation


class TestPipelineConfig:
    def test_defaults(self) -> None:
        cfg = PipelineConfig()

        assert cfg.response_validation is ResponseValidation.JSON
        assert cfg.strip_media_type_parameters is True
        assert cfg.debug is False
        assert cfg.message_indent == 2

    def test_override(self) -> None:
        cfg = PipelineConfig(
            response_validation=ResponseValidation.ALL,
            debug=True,
            message_indent=None,
        )

        assert cfg.response_validation is ResponseValidation.ALL
        assert cfg.debug is True
        assert cfg.message_indent is None

    def test_frozen(self) -> None:
        cfg = PipelineConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]

    def test_default_instance(self) -> None:
        assert DEFAULT_CONFIG == PipelineConfig()

    def test_equality(self) -> None:
        assert PipelineConfig(debug=True) == PipelineConfig(debug=True)
        assert PipelineConfig(debug=True) != PipelineConfig()


class TestResponseValidation:
    def test_values(self) -> None:
        assert ResponseValidation("json") is ResponseValidation.JSON
        assert ResponseValidation("all") is ResponseValidation.ALL
