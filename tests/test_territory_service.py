"""Tests for TerritoryService: claim placement, removal, border upkeep."""

import random
from unittest.mock import MagicMock

import pytest

from hexclaim.engine.drawables import BuildingSprite, DrawableRegistry
from hexclaim.engine.territory_service import TerritoryService
from hexclaim.loaders.territory_config_loader import TerritoryConfig
from hexclaim.models.building import BuildingKind
from hexclaim.models.hex import ORIGIN, HexCoord
from hexclaim.models.territory import TerritoryState
from hexclaim.util.errors import (
    ClaimantExistsError,
    NoBuildingError,
    NotAClaimantError,
    TerritoryError,
)
from hexclaim.util.events import BuildingEvicted, BuildingPlaced, ClaimantAdded, ClaimantRemoved, EventBus

TC = BuildingKind.TOWN_CENTER
TOWER = BuildingKind.TOWER


def expected_territory(claimants, radius=2):
    """Territory and border recomputed from scratch."""
    territory = set().union(*(c.disk(radius) for c in claimants))
    inner = set().union(*(c.disk(radius - 1) for c in claimants))
    return territory, territory - inner


def _make_service(radius: int = 2, drawables=None):
    config = TerritoryConfig(claim_radius=radius, seed=[])
    state = TerritoryState()
    drawables = drawables if drawables is not None else DrawableRegistry()
    return TerritoryService(state, drawables, EventBus(), config)


@pytest.fixture
def service():
    return _make_service()


@pytest.fixture
def scenario_b(service):
    service.place_claimant(ORIGIN, TC)
    service.place_claimant(HexCoord(2, -2), TOWER)
    return service


class TestScenarios:
    def test_single_town_center(self, service):
        """Scenario A: one claimant on an empty map."""
        service.place_claimant(ORIGIN, TC)
        state = service.state
        assert len(state.buildings) == 19
        assert set(state.buildings) == ORIGIN.disk(2)
        assert state.border == set(ORIGIN.ring(2))
        assert len(state.border) == 12
        assert state.get(ORIGIN).kind == TC
        assert all(state.get(h).kind == BuildingKind.BLANK for h in ORIGIN.disk(2) - {ORIGIN})

    def test_overlapping_tower(self, scenario_b):
        """Scenario B: a second claimant two steps away."""
        state = scenario_b.state
        claimants = [ORIGIN, HexCoord(2, -2)]
        territory, border = expected_territory(claimants)
        assert set(state.buildings) == territory
        assert state.border == border
        for c in claimants:
            assert not (state.border & c.disk(1))
        assert state.get(HexCoord(2, -2)).kind == TOWER

    def test_remove_between_two_claimants(self, scenario_b):
        """Scenario C: add a third claimant, then remove the middle one."""
        service = scenario_b
        state = service.state
        removed = HexCoord(2, -2)
        service.place_claimant(HexCoord(3, -1), TOWER)
        service.remove_claimant(removed)

        remaining = [ORIGIN, HexCoord(3, -1)]
        territory, border = expected_territory(remaining)
        assert set(state.buildings) == territory
        assert state.border == border
        assert state.pending_destruction == removed.disk(2) - territory
        assert HexCoord(2, -4) in state.pending_destruction

        # The old tower hex is on the (3,-1) tower's edge: kept, blank, border
        assert state.get(removed).kind == BuildingKind.BLANK
        assert removed in state.border
        assert state.get(ORIGIN).kind == TC
        assert state.get(HexCoord(3, -1)).kind == TOWER


class TestPlaceClaimant:
    def test_whole_claim_disk_registered(self, service):
        center = HexCoord(7, -3)
        service.place_claimant(center, TOWER)
        assert center.disk(2) <= set(service.state.buildings)

    def test_border_hexes_touch_unclaimed_space(self, service):
        service.place_claimant(HexCoord(-4, 9), TC)
        state = service.state
        for h in state.border:
            assert any(not state.is_occupied(n) for n in h.neighbors())

    def test_existing_buildings_are_kept(self, service):
        hut = HexCoord(1, 0)
        service.place(hut, BuildingKind.LUMBERJACK_HUT, overwrite=True)
        service.place_claimant(ORIGIN, TC)
        assert service.state.get(hut).kind == BuildingKind.LUMBERJACK_HUT

    def test_claimant_replaces_hut(self, service):
        hut = HexCoord(1, 0)
        service.place(hut, BuildingKind.LUMBERJACK_HUT, overwrite=True)
        service.place_claimant(hut, TOWER)
        assert service.state.get(hut).kind == TOWER

    def test_claimant_on_blank_inside_territory(self, service):
        service.place_claimant(ORIGIN, TC)
        service.place_claimant(HexCoord(1, 1), TOWER)
        territory, border = expected_territory([ORIGIN, HexCoord(1, 1)])
        assert set(service.state.buildings) == territory
        assert service.state.border == border

    def test_non_claimant_kind_rejected(self, service):
        with pytest.raises(NotAClaimantError):
            service.place_claimant(ORIGIN, BuildingKind.LUMBERJACK_HUT)
        assert not service.state.buildings

    def test_claimant_on_claimant_rejected(self, service):
        service.place_claimant(ORIGIN, TC)
        with pytest.raises(ClaimantExistsError) as excinfo:
            service.place_claimant(ORIGIN, TOWER)
        assert excinfo.value.position == ORIGIN
        assert service.state.get(ORIGIN).kind == TC

    def test_larger_claim_radius(self):
        service = _make_service(radius=3)
        service.place_claimant(ORIGIN, TC)
        assert len(service.state.buildings) == 37
        assert service.state.border == set(ORIGIN.ring(3))

    def test_radius_one_inner_disk_is_center(self):
        service = _make_service(radius=1)
        service.place_claimant(ORIGIN, TC)
        service.place_claimant(HexCoord(1, 0), TOWER)
        territory, border = expected_territory([ORIGIN, HexCoord(1, 0)], radius=1)
        assert service.state.border == border
        assert ORIGIN not in service.state.border


class TestRemoveClaimant:
    def test_remove_undoes_isolated_add(self, service):
        service.place_claimant(ORIGIN, TC)
        before = service.state.snapshot()

        far = HexCoord(10, 0)
        service.place_claimant(far, TOWER)
        service.remove_claimant(far)

        assert service.state.snapshot()["buildings"] == before["buildings"]
        assert service.state.snapshot()["border"] == before["border"]
        assert service.state.pending_destruction == far.disk(2)

    def test_remove_last_claimant_empties_map(self, service):
        service.place_claimant(ORIGIN, TC)
        service.remove_claimant(ORIGIN)
        assert not service.state.buildings
        assert not service.state.border
        assert service.state.pending_destruction == ORIGIN.disk(2)

    def test_remove_twice_faults(self, service):
        service.place_claimant(ORIGIN, TC)
        service.remove_claimant(ORIGIN)
        with pytest.raises(NoBuildingError):
            service.remove_claimant(ORIGIN)

    def test_remove_twice_inside_territory_faults(self, scenario_b):
        scenario_b.remove_claimant(HexCoord(2, -2))
        # Still covered by the town center, now a blank
        with pytest.raises(NotAClaimantError):
            scenario_b.remove_claimant(HexCoord(2, -2))

    def test_remove_empty_hex(self, service):
        with pytest.raises(TerritoryError):
            service.remove_claimant(HexCoord(5, 5))

    def test_remove_hut_through_claimant_path(self, service):
        service.place(ORIGIN, BuildingKind.LUMBERJACK_HUT, overwrite=True)
        with pytest.raises(NotAClaimantError):
            service.remove_claimant(ORIGIN)
        assert service.state.get(ORIGIN).kind == BuildingKind.LUMBERJACK_HUT

    def test_interior_survives_until_last_cover_removed(self, service):
        target = ORIGIN
        towers = [HexCoord(1, 0), HexCoord(0, 1), HexCoord(-1, 0)]
        for t in towers:
            service.place_claimant(t, TOWER)

        for index, t in enumerate(towers):
            service.remove_claimant(t)
            remaining = towers[index + 1:]
            territory, border = expected_territory(remaining)
            assert set(service.state.buildings) == territory
            assert service.state.border == border
            if remaining:
                assert service.state.is_occupied(target)
                assert target not in service.state.border
        assert not service.state.is_occupied(target)

    def test_uncovered_hut_is_evicted(self, service):
        service.place_claimant(ORIGIN, TC)
        hut = HexCoord(2, 0)
        service.place(hut, BuildingKind.LUMBERJACK_HUT, overwrite=True)
        service.remove_claimant(ORIGIN)
        assert not service.state.is_occupied(hut)
        assert hut in service.state.pending_destruction


class TestAgainstRecomputation:
    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_random_sequences_match_full_recomputation(self, seed):
        rng = random.Random(seed)
        service = _make_service()
        claimants: set[HexCoord] = set()
        for _ in range(60):
            if claimants and rng.random() < 0.4:
                target = rng.choice(sorted(claimants))
                service.remove_claimant(target)
                claimants.discard(target)
            else:
                target = HexCoord(rng.randint(-5, 5), rng.randint(-5, 5))
                if target in claimants:
                    continue
                service.place_claimant(target, rng.choice([TC, TOWER]))
                claimants.add(target)

            territory, border = expected_territory(claimants)
            assert set(service.state.buildings) == territory
            assert service.state.border == border
            assert {b.position for b in service.state.claimants()} == claimants


class TestRenderHandles:
    def test_one_sprite_per_registered_hex(self, scenario_b):
        drawables = scenario_b._drawables
        assert len(drawables) == len(scenario_b.state.buildings)
        for building in scenario_b.state.buildings.values():
            sprite = drawables.get(building.handle)
            assert isinstance(sprite, BuildingSprite)
            assert sprite.position == building.position
            assert sprite.label == building.kind.label

    def test_evicted_sprites_are_detached(self, scenario_b):
        scenario_b.remove_claimant(HexCoord(2, -2))
        assert len(scenario_b._drawables) == len(scenario_b.state.buildings)

    def test_overwrite_detaches_previous_handle(self):
        drawables = MagicMock()
        drawables.attach.side_effect = [11, 12]
        service = _make_service(drawables=drawables)
        service.place(ORIGIN, BuildingKind.LUMBERJACK_HUT, overwrite=True)
        service.place(ORIGIN, BuildingKind.BLANK, overwrite=True)
        drawables.detach.assert_called_once_with(11)
        assert service.state.get(ORIGIN).handle == 12

    def test_no_overwrite_is_noop(self):
        drawables = MagicMock()
        drawables.attach.return_value = 1
        service = _make_service(drawables=drawables)
        service.place(ORIGIN, BuildingKind.LUMBERJACK_HUT, overwrite=True)
        service.place(ORIGIN, BuildingKind.BLANK, overwrite=False)
        drawables.detach.assert_not_called()
        assert drawables.attach.call_count == 1
        assert service.state.get(ORIGIN).kind == BuildingKind.LUMBERJACK_HUT


class TestEvents:
    def test_claim_events(self, service):
        bus = service._events
        added, removed, evicted, placed = [], [], [], []
        bus.on(ClaimantAdded, added.append)
        bus.on(ClaimantRemoved, removed.append)
        bus.on(BuildingEvicted, evicted.append)
        bus.on(BuildingPlaced, placed.append)

        service.place_claimant(ORIGIN, TC)
        assert added == [ClaimantAdded(position=ORIGIN, kind=TC, border_size=12)]
        assert len(placed) == 19

        service.remove_claimant(ORIGIN)
        assert removed == [ClaimantRemoved(position=ORIGIN, evicted=19, border_size=0)]
        assert {e.position for e in evicted} == ORIGIN.disk(2)


class TestInitialize:
    def test_default_seed(self):
        state = TerritoryState()
        drawables = DrawableRegistry()
        service = TerritoryService(state, drawables, EventBus())
        service.initialize()

        territory, border = expected_territory([ORIGIN, HexCoord(3, -1)])
        assert set(state.buildings) == territory
        assert state.border == border
        assert state.pending_destruction == HexCoord(2, -2).disk(2) - territory
        # Sprites plus the border overlay
        assert len(drawables) == len(state.buildings) + 1
        assert service.border_overlay in list(drawables)

    def test_reinitialize_resets_and_attaches_overlay_once(self):
        state = TerritoryState()
        drawables = DrawableRegistry()
        service = TerritoryService(state, drawables, EventBus())
        service.initialize()
        overlay = service.border_overlay
        service.place_claimant(HexCoord(20, 20), TOWER)
        state.drain_pending_destruction()

        service.initialize()
        assert service.border_overlay is overlay
        assert HexCoord(20, 20) not in state.buildings
        assert len(drawables) == len(state.buildings) + 1

    def test_empty_seed_clears(self):
        service = _make_service()
        service.place_claimant(ORIGIN, TC)
        service.initialize()
        assert not service.state.buildings
        assert not service.state.border
        assert not service.state.pending_destruction
