"""Tests for NightActionResolver component."""

import pytest

from moderator.engine import GameState, NightActionStore, NightActionResolver, NightDelta
from moderator.engine.night_action_resolver import (
    resolve_fortune_teller,
    resolve_paladin,
    resolve_sorcerer,
    resolve_wolf,
)
from moderator.events import NightAction, NightDeath, PlayerRevived, RoleRevealed
from moderator.models import Player, PlayerStatus, Role, DEFAULT_TURN_ORDER

TURN_ORDER = list(DEFAULT_TURN_ORDER)


def make_test_state(dead: list[str] | None = None) -> GameState:
    """Create a six-player state with two wolves."""
    players = [
        Player(id=0, name="Pat", role=Role.PALADIN),
        Player(id=1, name="Sam", role=Role.SORCERER),
        Player(id=2, name="Fay", role=Role.FORTUNE_TELLER),
        Player(id=3, name="Wes", role=Role.WOLF),
        Player(id=4, name="Wil", role=Role.WOLF),
        Player(id=5, name="Vic", role=Role.VILLAGER),
    ]
    for player in players:
        if dead and player.name in dead:
            player.status = PlayerStatus.DEAD
    return GameState(players=players)


def make_store(*actions: tuple[Role, str, str | None]) -> NightActionStore:
    store = NightActionStore()
    for role, verb, target in actions:
        store.record(NightAction(role=role, action=verb, target=target))
    return store


@pytest.fixture
def resolver() -> NightActionResolver:
    return NightActionResolver()


class TestHandlers:
    """Tests for the per-role handlers, which must not mutate state."""

    def test_paladin_protects(self) -> None:
        state = make_test_state()
        delta = resolve_paladin(NightAction(role=Role.PALADIN, action="protect", target="Vic"), state)
        assert delta.protected == "Vic"
        assert delta.update_last_protected
        assert delta.last_protected == "Vic"
        assert state.cross_round.last_protected_target is None

    def test_paladin_repeat_target_void(self) -> None:
        """Test protecting last night's target has no effect."""
        state = make_test_state()
        state.cross_round.last_protected_target = "Vic"
        delta = resolve_paladin(NightAction(role=Role.PALADIN, action="protect", target="Vic"), state)
        assert delta.protected is None
        assert not delta.update_last_protected

    def test_paladin_pass_clears_last_protected(self) -> None:
        state = make_test_state()
        state.cross_round.last_protected_target = "Vic"
        delta = resolve_paladin(NightAction(role=Role.PALADIN, action="pass"), state)
        assert delta.protected is None
        assert delta.update_last_protected
        assert delta.last_protected is None

    def test_sorcerer_kill(self) -> None:
        state = make_test_state()
        delta = resolve_sorcerer(NightAction(role=Role.SORCERER, action="kill", target="Wes"), state)
        assert delta.killed == "Wes"
        assert delta.spent_potions == ["kill"]
        assert state.cross_round.sorcerer_potions.kill == 1

    def test_sorcerer_kill_without_potion(self) -> None:
        state = make_test_state()
        state.cross_round.sorcerer_potions.spend("kill")
        delta = resolve_sorcerer(NightAction(role=Role.SORCERER, action="kill", target="Wes"), state)
        assert delta == NightDelta()

    def test_sorcerer_revive_living_ignored(self) -> None:
        state = make_test_state()
        delta = resolve_sorcerer(NightAction(role=Role.SORCERER, action="revive", target="Vic"), state)
        assert delta == NightDelta()

    def test_sorcerer_pass(self) -> None:
        state = make_test_state()
        delta = resolve_sorcerer(NightAction(role=Role.SORCERER, action="pass"), state)
        assert delta == NightDelta()

    def test_fortune_teller_reveals(self) -> None:
        state = make_test_state()
        delta = resolve_fortune_teller(NightAction(role=Role.FORTUNE_TELLER, action="reveal", target="Wes"), state)
        assert delta.reveal_target == "Wes"
        assert delta.reveal_role == Role.WOLF

    def test_wolf_cannot_kill_living_wolf(self) -> None:
        state = make_test_state()
        delta = resolve_wolf(NightAction(role=Role.WOLF, action="kill", target="Wil"), state)
        assert delta.killed is None

    def test_unknown_verb_ignored(self) -> None:
        """Test a verb a role does not have matches no branch."""
        state = make_test_state()
        delta = resolve_wolf(NightAction(role=Role.WOLF, action="dance", target="Vic"), state)
        assert delta == NightDelta()


class TestNightDeltaMerge:
    """Tests for folding deltas."""

    def test_later_kill_wins(self) -> None:
        """Test the kill slot keeps the last writer."""
        merged = NightDelta(killed="Wes", spent_potions=["kill"]).merge(NightDelta(killed="Vic"))
        assert merged.killed == "Vic"
        assert merged.spent_potions == ["kill"]

    def test_empty_later_keeps_earlier(self) -> None:
        merged = NightDelta(protected="Vic").merge(NightDelta())
        assert merged.protected == "Vic"

    def test_merge_does_not_mutate(self) -> None:
        first = NightDelta(spent_potions=["kill"])
        first.merge(NightDelta(spent_potions=["revive"]))
        assert first.spent_potions == ["kill"]


class TestNightActionResolver:
    """Tests for NightActionResolver functionality."""

    def test_protection_overrides_kill(self, resolver: NightActionResolver) -> None:
        """Test a protected wolf victim survives."""
        state = make_test_state()
        store = make_store(
            (Role.PALADIN, "protect", "Vic"),
            (Role.WOLF, "kill", "Vic"),
        )

        deaths = resolver.resolve(state, store, TURN_ORDER)

        assert deaths == []
        assert state.is_alive("Vic")
        assert state.cross_round.last_protected_target == "Vic"
        assert state.log.of_type(NightDeath) == []

    def test_unprotected_kill(self, resolver: NightActionResolver) -> None:
        state = make_test_state()
        store = make_store(
            (Role.PALADIN, "protect", "Fay"),
            (Role.WOLF, "kill", "Vic"),
        )

        deaths = resolver.resolve(state, store, TURN_ORDER)

        assert deaths == ["Vic"]
        assert not state.is_alive("Vic")
        assert str(state.log.latest()) == "Vic was killed during the night"

    def test_repeat_protection_fails(self, resolver: NightActionResolver) -> None:
        """Test protecting the same player two nights running lets the kill through."""
        state = make_test_state()
        resolver.resolve(state, make_store((Role.PALADIN, "protect", "Vic")), TURN_ORDER)

        deaths = resolver.resolve(
            state,
            make_store((Role.PALADIN, "protect", "Vic"), (Role.WOLF, "kill", "Vic")),
            TURN_ORDER,
        )

        assert deaths == ["Vic"]
        # The void protection does not reset the last target
        assert state.cross_round.last_protected_target == "Vic"

    def test_protection_allowed_again_after_gap(self, resolver: NightActionResolver) -> None:
        """Test a different target in between makes the first one protectable again."""
        state = make_test_state()
        resolver.resolve(state, make_store((Role.PALADIN, "protect", "Vic")), TURN_ORDER)
        resolver.resolve(state, make_store((Role.PALADIN, "protect", "Fay")), TURN_ORDER)

        deaths = resolver.resolve(
            state,
            make_store((Role.PALADIN, "protect", "Vic"), (Role.WOLF, "kill", "Vic")),
            TURN_ORDER,
        )
        assert deaths == []

    def test_wolf_self_guard(self, resolver: NightActionResolver) -> None:
        """Test a wolf targeting a living wolf never kills it."""
        state = make_test_state()
        deaths = resolver.resolve(state, make_store((Role.WOLF, "kill", "Wil")), TURN_ORDER)
        assert deaths == []
        assert state.is_alive("Wil")

    def test_sorcerer_kill_spends_potion(self, resolver: NightActionResolver) -> None:
        state = make_test_state()
        deaths = resolver.resolve(state, make_store((Role.SORCERER, "kill", "Wes")), TURN_ORDER)

        assert deaths == ["Wes"]
        assert state.cross_round.sorcerer_potions.kill == 0

    def test_second_sorcerer_kill_has_no_effect(self, resolver: NightActionResolver) -> None:
        """Test a spent kill potion cannot be used again."""
        state = make_test_state()
        resolver.resolve(state, make_store((Role.SORCERER, "kill", "Wes")), TURN_ORDER)

        deaths = resolver.resolve(state, make_store((Role.SORCERER, "kill", "Wil")), TURN_ORDER)

        assert deaths == []
        assert state.is_alive("Wil")
        assert state.cross_round.sorcerer_potions.kill == 0

    def test_wolf_kill_overwrites_sorcerer_kill(self, resolver: NightActionResolver) -> None:
        """Test the later action in turn order owns the kill slot."""
        state = make_test_state()
        store = make_store(
            (Role.WOLF, "kill", "Vic"),
            (Role.SORCERER, "kill", "Wes"),
        )

        deaths = resolver.resolve(state, store, TURN_ORDER)

        assert deaths == ["Vic"]
        assert state.is_alive("Wes")
        # The potion is still consumed
        assert state.cross_round.sorcerer_potions.kill == 0

    def test_sorcerer_revive(self, resolver: NightActionResolver) -> None:
        state = make_test_state(dead=["Vic"])
        resolver.resolve(state, make_store((Role.SORCERER, "revive", "Vic")), TURN_ORDER)

        assert state.is_alive("Vic")
        assert state.cross_round.sorcerer_potions.revive == 0
        assert state.log.of_type(PlayerRevived)[0].target == "Vic"

    def test_reveal_logged_after_death(self, resolver: NightActionResolver) -> None:
        """Test the reveal is logged and statuses are untouched."""
        state = make_test_state()
        store = make_store(
            (Role.FORTUNE_TELLER, "reveal", "Wes"),
            (Role.WOLF, "kill", "Vic"),
        )

        resolver.resolve(state, store, TURN_ORDER)

        assert state.log.messages() == [
            "Fortune Teller revealed Wes is a Wolf",
            "Vic was killed during the night",
        ]
        assert state.is_alive("Wes")
        assert isinstance(state.log.latest(), RoleRevealed)

    def test_buffer_cleared(self, resolver: NightActionResolver) -> None:
        state = make_test_state()
        store = make_store((Role.WOLF, "kill", "Vic"))
        resolver.resolve(state, store, TURN_ORDER)
        assert len(store) == 0

    def test_no_actions(self, resolver: NightActionResolver) -> None:
        state = make_test_state()
        assert resolver.resolve(state, NightActionStore(), TURN_ORDER) == []
        assert len(state.log) == 0
