"""
Unit tests for PartnerResolver: candidate search, creation and area restriction.
"""
import pytest
from unittest.mock import MagicMock

from panesync.core.exceptions import NoActiveDocument, NoPartnerAvailable, StalePaneReference
from panesync.sync import PaneRegistry, PartnerResolver, SyncPropagator
from panesync.workspace import SplitOrientation


@pytest.fixture
def registry():
    return PaneRegistry()


def test_create_if_absent_splits_and_links(workspace, registry):
    """Scenario A: no other pane shows notes.md, so a vertical split is created."""
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    resolver = PartnerResolver(workspace, registry)

    p2 = resolver.resolve(p1, create_if_absent=True)

    assert p2 is not p1
    assert p2.document == "notes.md"
    assert p2.parent is p1.parent
    assert p1.parent.orientation == SplitOrientation.VERTICAL
    assert registry.get_partner(p1) is p2
    assert len(workspace.root_leaves()) == 2


def test_second_resolve_returns_existing_partner(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    resolver = PartnerResolver(workspace, registry)

    p2 = resolver.resolve(p1, create_if_absent=True)
    again = resolver.resolve(p1, create_if_absent=True)

    assert again is p2
    assert len(workspace.root_leaves()) == 2


def test_second_resolve_before_load_lands(deferred_workspace, deferred, config):
    """With async loads the new pane is still empty, yet it is reused."""
    registry = PaneRegistry()
    propagator = SyncPropagator(registry, config)
    resolver = PartnerResolver(deferred_workspace, registry, tracker=propagator)
    p1 = deferred_workspace.active_leaf
    p1.open_document("notes.md")
    deferred.flush()

    p2 = resolver.resolve(p1, create_if_absent=True)
    assert p2.document is None

    again = resolver.resolve(p1, create_if_absent=True)

    assert again is p2
    assert len(deferred_workspace.root_leaves()) == 2
    deferred.flush()
    assert p2.document == "notes.md"


def test_existing_pane_with_same_document_is_preferred(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    other = workspace.add_leaf(document="other.md")
    same = workspace.add_leaf(document="notes.md")
    resolver = PartnerResolver(workspace, registry)

    partner = resolver.resolve(p1, create_if_absent=True)

    assert partner is same
    assert registry.get_partner(other) is None
    assert len(workspace.root_leaves()) == 3


def test_first_match_in_enumeration_order_wins(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    first = workspace.add_leaf(document="notes.md")
    workspace.add_leaf(document="notes.md")
    resolver = PartnerResolver(workspace, registry)

    assert resolver.resolve(p1) is first


def test_sidebar_pane_never_selected(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    sidebar = workspace.add_sidebar_leaf("left", "notes.md")
    workspace.add_sidebar_leaf("right", "notes.md")
    resolver = PartnerResolver(workspace, registry)

    with pytest.raises(NoPartnerAvailable):
        resolver.resolve(p1, create_if_absent=False)

    partner = resolver.resolve(p1, create_if_absent=True)
    assert partner is not sidebar
    assert workspace.is_in_main_area(partner)


def test_no_document_raises(workspace, registry):
    resolver = PartnerResolver(workspace, registry)

    with pytest.raises(NoActiveDocument):
        resolver.resolve(workspace.active_leaf, create_if_absent=True)
    assert len(registry) == 0
    assert len(workspace.root_leaves()) == 1


def test_no_candidate_without_creation(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    workspace.add_leaf(document="other.md")
    resolver = PartnerResolver(workspace, registry)

    with pytest.raises(NoPartnerAvailable) as exc_info:
        resolver.resolve(p1, create_if_absent=False)

    assert exc_info.value.document == "notes.md"
    assert len(registry) == 0


def test_detached_source_is_stale(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    workspace.add_leaf(document="notes.md")
    workspace.detach_leaf(p1)
    resolver = PartnerResolver(workspace, registry)

    with pytest.raises(StalePaneReference):
        resolver.resolve(p1, create_if_absent=True)
    assert len(registry) == 0


def test_split_failure_becomes_no_partner(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    workspace.create_leaf_by_split = MagicMock(side_effect=RuntimeError("split refused"))
    resolver = PartnerResolver(workspace, registry)

    with pytest.raises(NoPartnerAvailable):
        resolver.resolve(p1, create_if_absent=True)
    assert len(registry) == 0


def test_source_is_never_its_own_partner(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    resolver = PartnerResolver(workspace, registry)

    with pytest.raises(NoPartnerAvailable):
        resolver.resolve(p1, create_if_absent=False)

    partner = resolver.resolve(p1, create_if_absent=True)
    assert partner is not p1


def test_existing_partner_showing_other_document_is_replaced(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    p2 = workspace.add_leaf(document="notes.md")
    p3 = workspace.add_leaf(document="draft.md")
    registry.set_linked_pair(p1, p3)
    resolver = PartnerResolver(workspace, registry)

    assert resolver.resolve(p1) is p2
    assert registry.get_partner(p3) is None


def test_earlier_pane_wins_over_current_partner(workspace, registry):
    p1 = workspace.active_leaf
    p1.open_document("notes.md")
    resolver = PartnerResolver(workspace, registry)
    p2 = resolver.resolve(p1, create_if_absent=True)
    p0 = workspace.create_leaf_by_split(p1, before=True)
    p0.open_document("notes.md")
    assert workspace.root_leaves() == [p0, p1, p2]

    partner = resolver.resolve(p1, create_if_absent=True)

    assert partner is p0
    assert registry.get_partner(p1) is p0
    assert registry.get_partner(p2) is None
    assert len(workspace.root_leaves()) == 3
