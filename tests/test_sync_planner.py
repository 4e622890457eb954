"""Tests for the deletion phase."""

from unittest.mock import Mock

import pytest

from pyrelup.assets_manager import ReleaseAssetsManager
from pyrelup.exceptions import ReleaseNotFoundError, ReleasePermissionError
from pyrelup.models import RemoteAsset
from pyrelup.patterns import compile_patterns
from pyrelup.sync import DeletionPlanner, ReleaseOperations


def make_planner(api, masks):
    return DeletionPlanner(
        ReleaseAssetsManager(api), ReleaseOperations(api), compile_patterns(masks)
    )


class TestDeletionPlanner:
    """Tests for DeletionPlanner."""

    def test_only_matching_assets_deleted(self, fake_api, target):
        """Test that only assets matching a mask are removed."""
        fake_api.add_asset("old.zip")
        fake_api.add_asset("keep.txt")

        deleted = make_planner(fake_api, ["*.zip"]).run(target)

        assert [a.name for a in deleted] == ["old.zip"]
        assert fake_api.names() == ["keep.txt"]

    def test_no_patterns_skips_listing(self, fake_api, target):
        """Test that nothing is listed when no mask is configured."""
        fake_api.add_asset("old.zip")

        assert make_planner(fake_api, []).run(target) == []
        assert fake_api.calls == []

    def test_lists_everything_before_deleting(self, fake_api, target):
        """Test that all pages are read before the first deletion."""
        for i in range(5):
            fake_api.add_asset(f"build-{i}.zip")
        planner = DeletionPlanner(
            ReleaseAssetsManager(fake_api, per_page=2),
            ReleaseOperations(fake_api),
            compile_patterns(["*.zip"]),
        )

        planner.run(target)

        kinds = [c[0] for c in fake_api.calls]
        assert kinds == ["list"] * 3 + ["delete"] * 5
        assert fake_api.names() == []

    def test_any_pattern_matches(self, fake_api, target):
        """Test that an asset matching any of several masks is removed."""
        for name in ("a.zip", "a.sha256", "notes.md"):
            fake_api.add_asset(name)

        make_planner(fake_api, ["*.zip", "*.SHA256"]).run(target)

        assert fake_api.names() == ["notes.md"]

    def test_already_deleted_asset_is_success(self, target):
        """Test that a 404 during deletion is tolerated."""
        api = Mock()
        api.delete_release_asset.side_effect = ReleaseNotFoundError("Not Found")
        planner = make_planner(api, ["*"])

        deleted = planner.execute(target, [RemoteAsset(id=1, name="gone.zip")])

        assert deleted == []

    def test_run_reports_only_deleted_assets(self, target):
        """Test that assets already gone are left out of the deleted list."""
        api = Mock()
        api.list_release_assets.return_value = (
            [{"id": 1, "name": "a.zip"}, {"id": 2, "name": "b.zip"}],
            False,
        )
        api.delete_release_asset.side_effect = [{}, ReleaseNotFoundError("Not Found")]

        deleted = make_planner(api, ["*.zip"]).run(target)

        assert [a.id for a in deleted] == [1]
        assert api.delete_release_asset.call_count == 2

    def test_other_delete_failure_propagates(self, target):
        """Test that non-404 failures abort the deletion phase."""
        api = Mock()
        api.delete_release_asset.side_effect = ReleasePermissionError("forbidden")
        planner = make_planner(api, ["*"])

        with pytest.raises(ReleasePermissionError):
            planner.execute(
                target,
                [RemoteAsset(id=1, name="a.zip"), RemoteAsset(id=2, name="b.zip")],
            )
        api.delete_release_asset.assert_called_once()

    def test_plan_does_not_delete(self, fake_api, target):
        """Test that planning alone leaves the release untouched."""
        fake_api.add_asset("old.zip")

        planned = make_planner(fake_api, ["*.zip"]).plan(target)

        assert [a.name for a in planned] == ["old.zip"]
        assert fake_api.names() == ["old.zip"]
