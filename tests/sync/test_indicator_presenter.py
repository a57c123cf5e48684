"""
Unit tests for IndicatorPresenter.
"""
from panesync.sync import LINKED_BADGE_ID, IndicatorPresenter, PaneRegistry


def badge_counts(workspace):
    return {leaf.id: len(leaf.header.badges) for leaf in workspace.all_leaves()}


def test_refresh_marks_linked_panes_only(workspace):
    registry = PaneRegistry()
    presenter = IndicatorPresenter(workspace, registry)
    a = workspace.active_leaf
    b = workspace.add_leaf()
    c = workspace.add_leaf()
    registry.set_linked_pair(a, b)

    presenter.refresh()

    assert set(presenter.marked_panes()) == {a, b}
    assert not c.header.has_badge(LINKED_BADGE_ID)
    badge = a.header.badges[0]
    assert badge.label == "Linked pane"
    assert badge.icon == "link"


def test_refresh_is_idempotent(workspace):
    registry = PaneRegistry()
    presenter = IndicatorPresenter(workspace, registry)
    a = workspace.active_leaf
    b = workspace.add_leaf()
    registry.set_linked_pair(a, b)

    presenter.refresh()
    once = badge_counts(workspace)
    presenter.refresh()

    assert badge_counts(workspace) == once
    assert once[a.id] == 1


def test_relink_moves_marker(workspace):
    """Scenario D: after P1 is relinked to P3, P2 loses its marker."""
    registry = PaneRegistry()
    presenter = IndicatorPresenter(workspace, registry)
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    p2 = workspace.add_leaf(document="notes.md")
    p3 = workspace.add_leaf(document="notes.md")
    registry.set_linked_pair(p1, p2)
    presenter.refresh()

    registry.set_linked_pair(p1, p3)
    presenter.refresh()

    assert set(presenter.marked_panes()) == {p1, p3}
    assert not p2.header.has_badge(LINKED_BADGE_ID)
    assert registry.pairs() == [tuple(sorted((p1.id, p3.id)))]


def test_other_badges_untouched(workspace):
    registry = PaneRegistry()
    presenter = IndicatorPresenter(workspace, registry)
    leaf = workspace.active_leaf
    leaf.header.add_badge("pinned", "pin", "Pinned")

    presenter.refresh()

    assert leaf.header.has_badge("pinned")


def test_disabled_presenter_clears(workspace):
    registry = PaneRegistry()
    presenter = IndicatorPresenter(workspace, registry)
    a = workspace.active_leaf
    b = workspace.add_leaf()
    registry.set_linked_pair(a, b)
    presenter.refresh()

    presenter.enabled = False
    presenter.refresh()

    assert presenter.marked_panes() == []
