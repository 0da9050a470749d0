from delve.core.rng import RNG
from delve.presentation.cli.storage import JsonCharacterStore, JsonDungeonStore, load_or_discard
from delve.services.dungeon_session import DungeonSession
from delve.services.maze_generator import generate_dungeon
from tests.helpers.dungeon_fakes import make_character


def test_missing_file_loads_as_none(tmp_path) -> None:
    assert JsonDungeonStore(tmp_path).load() is None
    assert JsonCharacterStore(tmp_path).load() is None


def test_character_store_round_trip(tmp_path) -> None:
    store = JsonCharacterStore(tmp_path)
    character = make_character(level=4)

    store.save(character)

    assert store.path.exists()
    assert store.load() == character


def test_session_resumes_from_disk(tmp_path) -> None:
    rng = RNG(10)
    store = JsonDungeonStore(tmp_path)
    session = DungeonSession(lambda difficulty: generate_dungeon(5, difficulty, rng), store=store)
    dungeon = session.get_or_create(2)
    moved_to = session.move_player(dungeon.open_directions()[0])

    resumed = DungeonSession(lambda difficulty: generate_dungeon(5, difficulty, rng), store=store)
    restored = resumed.get_or_create(2)

    assert restored is not dungeon
    assert restored.player == moved_to
    assert restored.current_room().discovered


def test_renew_deletes_saved_dungeon(tmp_path) -> None:
    rng = RNG(10)
    store = JsonDungeonStore(tmp_path)
    session = DungeonSession(lambda difficulty: generate_dungeon(3, difficulty, rng), store=store)
    session.get_or_create(1)
    assert store.path.exists()

    session.renew()

    assert not store.path.exists()
    store.clear()


def test_corrupt_save_is_discarded(tmp_path) -> None:
    store = JsonDungeonStore(tmp_path)
    store.path.write_text("{not json", encoding="utf-8")

    assert load_or_discard(store) is None
    assert not store.path.exists()
