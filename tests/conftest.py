import json
import stat
import sys

import pytest

import tes3json.plugins  # noqa: F401 - register built-in codecs
from tes3json.core.errors import CodecDecodeError
from tes3json.plugins.registry import PluginCodec, PluginRegistry

FAKE_MAGIC = b"TES3"

SAMPLE_RECORDS = [
    {"type": "Header", "author": "MrZer0", "description": "Тестовый плагин"},
    {"type": "Book", "id": "note_01", "name": "Записка", "text": "Привет"},
    {"type": "GameSetting", "id": "sMagicSkillFail", "value": {"String": "Ёлка и ёж"}},
]


def write_fake_plugin(path, records):
    path.write_bytes(FAKE_MAGIC + json.dumps(records, ensure_ascii=False).encode("utf-8"))


class FakeCodec(PluginCodec):
    """Stores records as magic bytes + UTF-8 JSON and remembers what it handled."""

    def __init__(self):
        self.loaded = []
        self.saved = []
        self.load_error = None
        self.save_error = None

    @classmethod
    def get_name(cls) -> str:
        return "fake"

    def load(self, path, options):
        if self.load_error:
            raise self.load_error
        with open(path, "rb") as fh:
            raw = fh.read()
        if not raw.startswith(FAKE_MAGIC):
            raise CodecDecodeError(f"{path} is not a plugin")
        objects = json.loads(raw[len(FAKE_MAGIC):].decode("utf-8"))
        self.loaded.append(path)
        return objects

    def save(self, path, objects, options):
        if self.save_error:
            raise self.save_error
        with open(path, "wb") as fh:
            fh.write(FAKE_MAGIC + json.dumps(objects, ensure_ascii=False).encode("utf-8"))
        self.saved.append((path, objects))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    cfg_path = tmp_path / "tes3json-config.json"
    monkeypatch.setattr("tes3json.config.CONFIG_PATH", cfg_path)
    monkeypatch.delenv("TES3CONV", raising=False)
    return cfg_path


@pytest.fixture
def fake_codec():
    PluginRegistry.register_codec(FakeCodec)
    yield FakeCodec()
    PluginRegistry.unregister_codec(FakeCodec.get_name())


@pytest.fixture
def sample_records():
    return json.loads(json.dumps(SAMPLE_RECORDS))


@pytest.fixture
def make_plugin():
    return write_fake_plugin


@pytest.fixture
def sample_plugin(tmp_path):
    path = tmp_path / "sample.esp"
    write_fake_plugin(path, SAMPLE_RECORDS)
    return path


@pytest.fixture
def fake_tes3conv(tmp_path):
    """An executable standing in for tes3conv, speaking the same on-disk format as FakeCodec."""
    if sys.platform.startswith("win"):
        pytest.skip("shebang scripts are POSIX only")

    script = tmp_path / "bin" / "tes3conv"
    script.parent.mkdir()
    script.write_text(
        f"#!{sys.executable}\n"
        "import json, sys\n"
        "args = [a for a in sys.argv[1:] if not a.startswith('--')]\n"
        "src, dst = args\n"
        "if src.endswith('.json'):\n"
        "    with open(src, encoding='utf-8') as fh:\n"
        "        data = json.load(fh)\n"
        "    with open(dst, 'wb') as fh:\n"
        "        fh.write(b'TES3' + json.dumps(data, ensure_ascii=False).encode('utf-8'))\n"
        "else:\n"
        "    with open(src, 'rb') as fh:\n"
        "        raw = fh.read()\n"
        "    if not raw.startswith(b'TES3'):\n"
        "        sys.stderr.write('not a TES3 plugin\\n')\n"
        "        sys.exit(2)\n"
        "    with open(dst, 'w', encoding='utf-8') as fh:\n"
        "        fh.write(raw[4:].decode('utf-8'))\n",
        encoding="utf-8",
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(script)
