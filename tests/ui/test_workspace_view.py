"""
Qt view tests (offscreen platform).
"""
import pytest

from panesync.sync import PaneSyncEngine
from panesync.sync.engine import LINK_TITLE
from panesync.ui import SyncSettingsDialog, WorkspaceView


@pytest.fixture
def view(qapp, workspace):
    view = WorkspaceView(workspace)
    yield view
    view.deleteLater()


def test_one_pane_widget_per_leaf(view, workspace):
    workspace.add_leaf(document="notes.md")
    workspace.add_sidebar_leaf("left")

    for leaf in workspace.all_leaves():
        assert view.pane_widget(leaf.id) is not None


def test_closed_leaf_widget_dropped(view, workspace):
    leaf = workspace.add_leaf()
    workspace.detach_leaf(leaf)

    assert view.pane_widget(leaf.id) is None


def test_title_follows_document(view, workspace):
    leaf = workspace.active_leaf

    leaf.open_document("/tmp/missing/notes.md")

    assert view.pane_widget(leaf.id).header.title_label.text() == "notes.md"


def test_link_badge_has_accessible_label(view, workspace, config):
    engine = PaneSyncEngine(workspace, config)
    engine.attach()
    leaf = workspace.active_leaf
    leaf.open_document("notes.md")

    partner = engine.link_pane(leaf)

    for pane_leaf in (leaf, partner):
        labels = view.pane_widget(pane_leaf.id).header.badge_labels
        assert list(labels) == ["pane-sync-linked"]
        assert labels["pane-sync-linked"].accessibleName() == "Linked pane"

    engine.teardown()
    assert view.pane_widget(leaf.id).header.badge_labels == {}


def test_context_menu_built_from_file_menu(view, workspace, config):
    engine = PaneSyncEngine(workspace, config)
    engine.attach()
    leaf = workspace.active_leaf
    leaf.open_document("notes.md")

    menu = view.pane_widget(leaf.id).build_context_menu()
    actions = menu.actions()

    assert [action.text() for action in actions] == [LINK_TITLE]
    actions[0].trigger()
    assert engine.registry.is_linked(leaf)
    engine.teardown()


def test_settings_dialog_updates_config(qapp, config):
    dialog = SyncSettingsDialog(config)

    dialog.enabled_check.setChecked(False)
    assert config.data.sync.enabled is False

    config.update("sync", "show_indicators", False)
    assert dialog.indicators_check.isChecked() is False
    dialog.reject()
