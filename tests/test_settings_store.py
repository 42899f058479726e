import json

import pytest

from app.core.settings_store import STORAGE_KEY, SettingsStore
from app.models.schemas import ChatSettings


def test_missing_file_gives_defaults(tmp_path):
    s = SettingsStore(tmp_path / "none.json").load()
    assert s == ChatSettings()
    assert s.bg_color == "#F0E6FF"


def test_default_path_from_env(tmp_path):
    assert SettingsStore().path == tmp_path / "settings.json"


def test_save_uses_browser_keys(tmp_path):
    store = SettingsStore(tmp_path / "s.json")
    store.save(ChatSettings(chat_message_api_url="https://x/api"))
    doc = json.loads((tmp_path / "s.json").read_text())
    assert doc[STORAGE_KEY]["chatMessageApiUrl"] == "https://x/api"
    assert doc[STORAGE_KEY]["bgColor"] == "#F0E6FF"


def test_partial_document_merges_over_defaults(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({STORAGE_KEY: {"bgImage": "data:x", "chatMessageApiPassword": None, "extra": 1}}))
    s = SettingsStore(path).load()
    assert s.bg_image == "data:x"
    assert s.chat_message_api_password == ""
    assert s.bg_color == "#F0E6FF"


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "s.json"
    path.write_text("{not json")
    assert SettingsStore(path).load() == ChatSettings()


def test_update_accepts_field_and_browser_names(tmp_path):
    store = SettingsStore(tmp_path / "s.json")
    store.update(chat_history_api_url="http://h/history")
    s = store.update(chatMessageApiPassword="pw")
    assert s.chat_history_api_url == "http://h/history"
    assert s.chat_message_api_password == "pw"
    assert store.load() == s


def test_update_rejects_unknown_key(tmp_path):
    with pytest.raises(KeyError):
        SettingsStore(tmp_path / "s.json").update(colour="red")


def test_invalid_value_keeps_other_saved_settings(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({STORAGE_KEY: {
        "bgColor": None,
        "bgImage": 42,
        "chatMessageApiUrl": "https://x/api",
        "chatMessageApiPassword": "pw",
    }}))
    s = SettingsStore(path).load()
    assert s.bg_color == "#F0E6FF"
    assert s.bg_image == ""
    assert s.chat_message_api_url == "https://x/api"
    assert s.chat_message_api_password == "pw"
