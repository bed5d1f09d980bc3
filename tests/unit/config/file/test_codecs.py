from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest
from result import is_err, is_ok

from treeconf.config.file import (
    CodecDecodeError,
    CodecRegistry,
    CodecUnavailable,
    JsonCodec,
    TomlCodec,
    UnsupportedFormat,
    YamlCodec,
    default_codecs,
)
from treeconf.config.file import codecs as codecs_module


def test_default_registry_dispatches_by_extension() -> None:
    registry = default_codecs()

    assert isinstance(registry.lookup(Path("c.yaml")).unwrap(), YamlCodec)
    assert isinstance(registry.lookup(Path("c.yml")).unwrap(), YamlCodec)
    assert isinstance(registry.lookup(Path("c.json")).unwrap(), JsonCodec)
    assert isinstance(registry.lookup(Path("c.toml")).unwrap(), TomlCodec)


def test_lookup_reports_unsupported_extension() -> None:
    result = default_codecs().lookup(Path("config.ini"))

    assert is_err(result)
    failure = result.err_value
    assert isinstance(failure, UnsupportedFormat)
    assert failure.extension == ".ini"
    assert "`.ini` is not supported" in failure.message


def test_registry_reports_missing_writer_only_for_writes(monkeypatch: pytest.MonkeyPatch) -> None:
    real_find_spec = importlib.util.find_spec

    def fake_find_spec(name: str, *args: object, **kwargs: object) -> object:
        if name == "tomli_w":
            return None
        return real_find_spec(name, *args, **kwargs)

    monkeypatch.setattr(codecs_module.importlib.util, "find_spec", fake_find_spec)
    registry = CodecRegistry([YamlCodec(), TomlCodec()])

    result = registry.lookup(Path("config.toml"), for_write=True)

    assert is_err(result)
    failure = result.err_value
    assert isinstance(failure, CodecUnavailable)
    assert failure.dependency == "tomli_w"
    assert "tomli_w" in failure.message
    assert isinstance(registry.lookup(Path("config.toml")).unwrap(), TomlCodec)
    assert ".toml" in registry
    assert is_ok(registry.lookup(Path("config.yml"), for_write=True))


def test_registry_reports_missing_reader(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(codecs_module.importlib.util, "find_spec", lambda name, *a, **k: None)
    registry = CodecRegistry([YamlCodec()])

    for for_write in (False, True):
        result = registry.lookup(Path("config.yaml"), for_write=for_write)
        assert is_err(result)
        assert result.err_value.dependency == "yaml"


def test_registering_available_codec_clears_missing_entry(monkeypatch: pytest.MonkeyPatch) -> None:
    real_find_spec = importlib.util.find_spec
    monkeypatch.setattr(codecs_module.importlib.util, "find_spec", lambda name, *a, **k: None)
    registry = CodecRegistry([TomlCodec()])
    assert is_err(registry.lookup(Path("config.toml"), for_write=True))
    monkeypatch.setattr(codecs_module.importlib.util, "find_spec", real_find_spec)

    registry.register(TomlCodec())

    assert is_ok(registry.lookup(Path("config.toml"), for_write=True))
    assert registry.extensions == (".toml",)


def test_yaml_codec_reports_position_of_syntax_error() -> None:
    with pytest.raises(CodecDecodeError) as excinfo:
        YamlCodec().decode(b"a: 1\nb: [unclosed\n")

    assert excinfo.value.line is not None
    assert excinfo.value.column is not None


def test_json_codec_reports_position_of_syntax_error() -> None:
    with pytest.raises(CodecDecodeError) as excinfo:
        JsonCodec().decode(b'{\n  "a": }')

    assert excinfo.value.line == 2


def test_toml_codec_rejects_invalid_document() -> None:
    with pytest.raises(CodecDecodeError):
        TomlCodec().decode(b"a = = 1")


def test_yaml_codec_keeps_key_order() -> None:
    encoded = YamlCodec().encode({"zeta": 1, "alpha": 2}).decode("utf-8")

    assert encoded.index("zeta") < encoded.index("alpha")


def test_json_codec_encodes_indented_document() -> None:
    assert JsonCodec().encode({"a": {"b": 1}}) == b'{\n  "a": {\n    "b": 1\n  }\n}\n'


def test_toml_codec_encodes_nested_tables() -> None:
    encoded = TomlCodec().encode({"title": "x", "db": {"port": 5432}}).decode("utf-8")

    assert 'title = "x"' in encoded
    assert "[db]" in encoded
    assert "port = 5432" in encoded


def test_json_codec_rejects_invalid_utf8() -> None:
    with pytest.raises(CodecDecodeError):
        JsonCodec().decode(b'{"a": "\xff"}')
