import json
from unittest.mock import MagicMock

import pytest
from PIL import Image

from src.websearch.defaults import load_default_engines
from src.websearch.registry import EngineRegistry


@pytest.fixture
def trash(monkeypatch):
    mock = MagicMock()
    monkeypatch.setattr("src.websearch.icons.send2trash", mock)
    return mock


class TestOpen:
    def test_first_run_seeds_defaults(self, store, engines_file, tmp_path):
        registry = EngineRegistry.open(store, tmp_path / "icons")

        names = [e.name for e in registry.engines]
        assert "Google" in names
        assert names == sorted(names)
        assert engines_file.exists()
        assert len(json.loads(engines_file.read_text(encoding="utf-8"))) == len(names)

    def test_loads_stored_engines(self, store, make_engine):
        store.save([make_engine("Zeta"), make_engine("Alpha")])

        registry = EngineRegistry.open(store)

        assert [e.name for e in registry.engines] == ["Alpha", "Zeta"]

    def test_rewrites_legacy_file(self, store, engines_file):
        engines_file.parent.mkdir(parents=True)
        engines_file.write_text(json.dumps([{"name": "Google", "url": "%s"}]), encoding="utf-8")

        registry = EngineRegistry.open(store)

        (record,) = json.loads(engines_file.read_text(encoding="utf-8"))
        assert record["id"] == registry.engines[0].id
        assert record["fallback"] is True


class TestSetEngines:
    def test_sorts_persists_and_notifies(self, registry, store, make_engine):
        seen = []
        registry.subscribe(seen.append)

        snapshot = registry.set_engines([make_engine("Youtube"), make_engine("Amazon")])

        assert [e.name for e in snapshot] == ["Amazon", "Youtube"]
        assert seen == [snapshot]
        assert store.load().engines == list(snapshot)

    def test_rejects_duplicate_ids(self, registry, make_engine):
        with pytest.raises(ValueError):
            registry.set_engines([make_engine("A", engine_id="x"), make_engine("B", engine_id="x")])

    def test_old_snapshots_are_untouched(self, registry, make_engine):
        first = registry.set_engines([make_engine("Amazon")])

        registry.set_engines([*first, make_engine("Ebay")])

        assert [e.name for e in first] == ["Amazon"]
        assert [e.name for e in registry.engines] == ["Amazon", "Ebay"]

    def test_unsubscribe_stops_notifications(self, registry, make_engine):
        seen = []
        unsubscribe = registry.subscribe(seen.append)
        unsubscribe()

        registry.set_engines([make_engine("Amazon")])

        assert seen == []

    def test_save_failure_keeps_memory_state(self, make_engine):
        store = MagicMock()
        store.save.return_value = False
        registry = EngineRegistry(store)

        registry.set_engines([make_engine("Amazon")])

        assert [e.name for e in registry.engines] == ["Amazon"]


class TestMutations:
    def test_restore_defaults_assigns_fresh_ids(self, registry):
        first = {e.id for e in registry.restore_defaults()}
        second = {e.id for e in registry.restore_defaults()}

        assert len(first) == len(load_default_engines())
        assert first.isdisjoint(second)

    def test_add_engine_assigns_unique_id(self, registry, make_engine):
        registry.set_engines([make_engine("Amazon")])

        engine = registry.add_engine("Crates", "https://crates.io/search?q=%s", trigger="cr")

        assert engine.id != "amazon"
        assert len(engine.id) == 8
        assert [e.name for e in registry.engines] == ["Amazon", "Crates"]

    def test_remove_engine_discards_local_icon(self, registry, make_engine, tmp_path, trash):
        icon = tmp_path / "icon.png"
        icon.write_bytes(b"png")
        registry.set_engines([make_engine("Amazon", icon_reference=icon.as_uri())])

        registry.remove_engine("amazon")

        assert registry.engines == ()
        trash.assert_called_once_with(icon)

    def test_remove_engine_keeps_bundled_icon(self, registry, make_engine, trash):
        registry.set_engines([make_engine("Amazon", icon_reference=":amazon")])

        registry.remove_engine("amazon")

        trash.assert_not_called()

    def test_remove_unknown_engine(self, registry):
        with pytest.raises(KeyError):
            registry.remove_engine("missing")

    def test_update_engine_keeps_id_and_resorts(self, registry, make_engine):
        registry.set_engines([make_engine("Amazon"), make_engine("Ebay")])

        updated = registry.update_engine("amazon", name="Zon", url="https://zon.example/%s")

        assert updated.id == "amazon"
        assert [e.name for e in registry.engines] == ["Ebay", "Zon"]

    def test_update_engine_rejects_id_change(self, registry, make_engine):
        registry.set_engines([make_engine("Amazon")])

        with pytest.raises(ValueError):
            registry.update_engine("amazon", id="other")

    def test_replacing_local_icon_discards_it(self, registry, make_engine, tmp_path, trash):
        icon = tmp_path / "icon.png"
        icon.write_bytes(b"png")
        registry.set_engines([make_engine("Amazon", icon_reference=str(icon))])

        registry.update_engine("amazon", icon_reference=":amazon")

        trash.assert_called_once_with(icon)

    def test_set_trigger_and_fallback(self, registry, make_engine):
        registry.set_engines([make_engine("Amazon", trigger="ama")])

        registry.set_trigger("amazon", " az ")
        registry.set_fallback("amazon", True)

        engine = registry.get("amazon")
        assert engine.trigger == "az"
        assert engine.fallback is True

    def test_set_icon_stores_png(self, registry, make_engine, tmp_path, trash):
        source = tmp_path / "logo.png"
        Image.new("RGBA", (64, 64)).save(source)
        registry.set_engines([make_engine("Amazon")])

        engine = registry.set_icon("amazon", source)

        stored = tmp_path / "icons" / "amazon.png"
        assert engine.icon_reference == stored.resolve().as_uri()
        assert stored.exists()
        trash.assert_not_called()

    def test_set_icon_replaces_local_icon(self, registry, make_engine, tmp_path, trash):
        old = tmp_path / "old.png"
        old.write_bytes(b"png")
        source = tmp_path / "logo.png"
        Image.new("RGB", (32, 32)).save(source)
        registry.set_engines([make_engine("Amazon", icon_reference=old.as_uri())])

        engine = registry.set_icon("amazon", source)

        trash.assert_called_once_with(old)
        assert engine.icon_reference == (tmp_path / "icons" / "amazon.png").resolve().as_uri()

    def test_failed_icon_save_keeps_current_icon(self, registry, make_engine, tmp_path, trash):
        old = tmp_path / "old.png"
        old.write_bytes(b"png")
        broken = tmp_path / "broken.png"
        broken.write_text("not an image")
        registry.set_engines([make_engine("Amazon", icon_reference=old.as_uri())])

        assert registry.set_icon("amazon", broken) is None

        trash.assert_not_called()
        assert registry.get("amazon").icon_reference == old.as_uri()
        assert not (tmp_path / "icons" / "amazon.staged.png").exists()
