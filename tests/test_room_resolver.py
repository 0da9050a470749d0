import pytest

from delve.core.rng import RNG
from delve.domain.dungeon import RoomType
from delve.services.dungeon_session import DungeonSession
from delve.services.interfaces import CombatResult
from delve.services.maze_generator import generate_dungeon
from delve.services.room_resolver import (
    BossDefeatedEvent,
    CombatResolvedEvent,
    ItemFoundEvent,
    NothingFoundEvent,
    RoomResolver,
    TrapTriggeredEvent,
)
from tests.helpers.dungeon_fakes import (
    AlwaysRNG,
    FakeCombat,
    FakeItemGenerator,
    FakeRoomPrompter,
    MemoryStore,
    make_character,
    make_room,
)


def _resolver(
    *,
    rng: RNG | None = None,
    combat: FakeCombat | None = None,
    prompter: FakeRoomPrompter | None = None,
    items: FakeItemGenerator | None = None,
    character_store: MemoryStore | None = None,
) -> tuple[RoomResolver, DungeonSession]:
    dungeon_rng = RNG(1)
    session = DungeonSession(lambda difficulty: generate_dungeon(3, difficulty, dungeon_rng))
    session.get_or_create(1)
    resolver = RoomResolver(
        session=session,
        combat=combat or FakeCombat(),
        item_generator=items or FakeItemGenerator(),
        prompter=prompter or FakeRoomPrompter(),
        rng=rng or RNG(1),
        character_store=character_store,
    )
    return resolver, session


@pytest.mark.parametrize("room_type", list(RoomType))
def test_resolved_rooms_are_a_no_op(room_type: RoomType) -> None:
    combat = FakeCombat()
    prompter = FakeRoomPrompter()
    items = FakeItemGenerator()
    resolver, session = _resolver(combat=combat, prompter=prompter, items=items)
    room = make_room(room_type)
    room.clear()

    resolution = resolver.resolve(room, make_character())

    assert resolution.outcome == "cleared"
    assert resolution.events == []
    assert combat.calls == []
    assert prompter.inspected == 0
    assert prompter.chest_reveals == []
    assert items.levels == []
    assert session.has_dungeon


def test_start_room_is_a_no_op() -> None:
    prompter = FakeRoomPrompter()
    resolver, _ = _resolver(prompter=prompter)

    resolution = resolver.resolve(make_room(RoomType.START), make_character())

    assert resolution.outcome == "cleared"
    assert prompter.inspected == 0


def test_empty_room_search_finds_level_one_item() -> None:
    items = FakeItemGenerator()
    store = MemoryStore()
    resolver, _ = _resolver(rng=AlwaysRNG(True), items=items, character_store=store)
    character = make_character(level=4)
    room = make_room(RoomType.EMPTY)

    resolution = resolver.resolve(room, character)

    assert resolution.outcome == "cleared"
    assert items.levels == [1]
    assert isinstance(resolution.events[0], ItemFoundEvent)
    assert resolution.events[0].source == "search"
    assert character.inventory == [resolution.events[0].item]
    assert store.saves == 1
    assert room.cleared and room.resolved


def test_empty_room_search_can_come_up_empty() -> None:
    items = FakeItemGenerator()
    resolver, _ = _resolver(rng=AlwaysRNG(False), items=items)
    room = make_room(RoomType.EMPTY)

    resolution = resolver.resolve(room, make_character())

    assert [type(event) for event in resolution.events] == [NothingFoundEvent]
    assert items.levels == []
    assert room.resolved


def test_empty_room_declined_inspection_clears_room() -> None:
    items = FakeItemGenerator()
    resolver, _ = _resolver(prompter=FakeRoomPrompter(inspect=False), items=items)
    room = make_room(RoomType.EMPTY)

    resolution = resolver.resolve(room, make_character())

    assert resolution.events == []
    assert items.levels == []
    assert room.resolved

    # Second visit does not prompt again.
    prompter = FakeRoomPrompter()
    again, _ = _resolver(prompter=prompter)
    again.resolve(room, make_character())
    assert prompter.inspected == 0


def test_trap_springs_when_inspected_and_unlucky() -> None:
    resolver, session = _resolver(rng=AlwaysRNG(False))
    room = make_room(RoomType.TRAP)

    resolution = resolver.resolve(room, make_character())

    assert resolution.outcome == "fled"
    assert resolution.is_terminal
    assert isinstance(resolution.events[0], TrapTriggeredEvent)
    assert not session.has_dungeon
    assert not room.resolved


def test_trap_found_safe_when_lucky() -> None:
    resolver, session = _resolver(rng=AlwaysRNG(True))
    room = make_room(RoomType.TRAP)

    resolution = resolver.resolve(room, make_character())

    assert resolution.outcome == "cleared"
    assert [type(event) for event in resolution.events] == [NothingFoundEvent]
    assert session.has_dungeon
    assert room.resolved


def test_trap_ignored_when_not_inspected() -> None:
    resolver, session = _resolver(rng=AlwaysRNG(False), prompter=FakeRoomPrompter(inspect=False))
    room = make_room(RoomType.TRAP)

    resolution = resolver.resolve(room, make_character())

    assert resolution.outcome == "cleared"
    assert session.has_dungeon


def test_trap_is_presented_as_empty_room() -> None:
    seen = []

    class RecordingPrompter(FakeRoomPrompter):
        def ask_inspect(self, view) -> bool:
            seen.append(view.apparent_type)
            return False

    resolver, _ = _resolver(prompter=RecordingPrompter())
    resolver.resolve(make_room(RoomType.TRAP), make_character())

    assert seen == [RoomType.EMPTY]


def test_chest_grants_item_at_character_level() -> None:
    prompter = FakeRoomPrompter()
    items = FakeItemGenerator()
    resolver, _ = _resolver(prompter=prompter, items=items)
    character = make_character(level=3)
    room = make_room(RoomType.CHEST)

    resolution = resolver.resolve(room, character)

    assert resolution.outcome == "cleared"
    assert items.levels == [3]
    assert len(character.inventory) == 1
    assert prompter.chest_reveals == [None, character.inventory[0]]
    assert isinstance(resolution.events[0], ItemFoundEvent)
    assert resolution.events[0].source == "chest"
    assert room.cleared

    resolver.resolve(room, character)
    assert len(character.inventory) == 1


def test_enemy_defeated_clears_room() -> None:
    combat = FakeCombat(CombatResult(success=True))
    store = MemoryStore()
    resolver, session = _resolver(combat=combat, character_store=store)
    character = make_character()
    room = make_room(RoomType.ENEMY)
    enemy = room.enemies[0]

    resolution = resolver.resolve(room, character)

    assert resolution.outcome == "cleared"
    assert combat.calls == [(character, enemy)]
    assert room.cleared and room.enemies == []
    assert store.saves == 1
    assert session.has_dungeon
    assert resolution.events == [CombatResolvedEvent(enemy_name=enemy.name, success=True, fled=False)]


@pytest.mark.parametrize(
    ("result", "outcome"),
    [(CombatResult(success=False, fled=True), "fled"), (CombatResult(success=False), "died")],
)
def test_enemy_not_defeated_leaves_room_unchanged(result: CombatResult, outcome: str) -> None:
    resolver, session = _resolver(combat=FakeCombat(result))
    room = make_room(RoomType.ENEMY)
    enemy = room.enemies[0]

    resolution = resolver.resolve(room, make_character())

    assert resolution.outcome == outcome
    assert not room.cleared
    assert room.enemies == [enemy]
    assert session.has_dungeon


def test_boss_defeated_completes_and_renews() -> None:
    resolver, session = _resolver(combat=FakeCombat(CombatResult(success=True)))
    room = make_room(RoomType.BOSS)

    resolution = resolver.resolve(room, make_character())

    assert resolution.outcome == "completed"
    assert any(isinstance(event, BossDefeatedEvent) for event in resolution.events)
    assert room.cleared
    assert not session.has_dungeon


def test_boss_escape_is_fled() -> None:
    resolver, session = _resolver(combat=FakeCombat(CombatResult(success=False, fled=True)))
    room = make_room(RoomType.BOSS)

    resolution = resolver.resolve(room, make_character())

    assert resolution.outcome == "fled"
    assert not room.cleared
    assert session.has_dungeon


def test_combat_room_without_enemy_is_rejected() -> None:
    resolver, _ = _resolver()
    room = make_room(RoomType.ENEMY, enemies=[])
    room.cleared = False

    with pytest.raises(ValueError):
        resolver.resolve(room, make_character())


def test_combat_error_leaves_room_untouched() -> None:
    class ExplodingCombat(FakeCombat):
        def __call__(self, character, enemy):
            raise RuntimeError("boom")

    resolver, _ = _resolver(combat=ExplodingCombat())
    room = make_room(RoomType.ENEMY)

    with pytest.raises(RuntimeError):
        resolver.resolve(room, make_character())

    assert not room.cleared
    assert len(room.enemies) == 1
