"""Unit tests for the persisted project history."""

import json

from visionbootstrap.core.project_store import ProjectStore, load_history, save_history


class TestLoadHistory:
    """Forgiving history loading."""

    def test_missing_file(self, temp_dir):
        assert load_history(temp_dir / "missing.json") == []

    def test_corrupt_file(self, temp_dir):
        path = temp_dir / "history.json"
        path.write_text("{not json")
        assert load_history(path) == []

    def test_non_list_payload(self, temp_dir):
        path = temp_dir / "history.json"
        path.write_text(json.dumps({"id": "p1"}))
        assert load_history(path) == []

    def test_invalid_entries_are_dropped(self, temp_dir, make_project):
        path = temp_dir / "history.json"
        good = make_project("p1").model_dump(mode="json", by_alias=True)
        path.write_text(json.dumps([{"id": "broken"}, good, "junk"]))

        projects = load_history(path)

        assert [p.id for p in projects] == ["p1"]

    def test_duplicate_ids_keep_first(self, temp_dir, make_project):
        path = temp_dir / "history.json"
        save_history(path, [make_project("p1", name="newer"), make_project("p1", name="older")])

        projects = load_history(path)

        assert len(projects) == 1
        assert projects[0].name == "newer"


class TestSaveHistory:
    """History file format."""

    def test_camel_case_keys(self, temp_dir, project):
        path = temp_dir / "history.json"
        save_history(path, [project])

        data = json.loads(path.read_text())

        assert data[0]["createdAt"] == project.created_at
        assert data[0]["variations"][0]["themeName"] == "V1"

    def test_no_temp_files_left(self, temp_dir, project):
        path = temp_dir / "history.json"
        save_history(path, [project])
        assert [p.name for p in temp_dir.iterdir()] == ["history.json"]


class TestProjectStore:
    """Tests for ProjectStore."""

    def test_save_prepends(self, store, make_project):
        store.save(make_project("a"))
        store.save(make_project("b"))
        assert [p.id for p in store.list()] == ["b", "a"]

    def test_save_replaces_same_id(self, store, make_project):
        store.save(make_project("a", name="first"))
        store.save(make_project("b"))
        store.save(make_project("a", name="second"))

        ids = [p.id for p in store.list()]
        assert ids == ["a", "b"]
        assert store.get("a").name == "second"

    def test_delete_preserves_order(self, store, make_project):
        for project_id in ("a", "b", "c"):
            store.save(make_project(project_id))

        assert store.delete("b") is True
        assert [p.id for p in store.list()] == ["c", "a"]

    def test_delete_unknown_id(self, store, make_project):
        store.save(make_project("a"))
        assert store.delete("zzz") is False
        assert len(store) == 1

    def test_persists_across_instances(self, test_config, store, make_project):
        store.save(make_project("a"))
        store.save(make_project("b"))
        store.delete("a")

        reloaded = ProjectStore(test_config.history_path)

        assert [p.id for p in reloaded.list()] == ["b"]
        assert reloaded.get("b") == store.get("b")

    def test_list_returns_copy(self, store, project):
        store.save(project)
        store.list().clear()
        assert len(store) == 1

    def test_corrupt_file_gives_empty_store(self, test_config):
        test_config.history_path.write_text("garbage")
        assert ProjectStore(test_config.history_path).list() == []
