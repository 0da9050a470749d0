from delve.core.rng import RNG
from delve.domain.dungeon import Position, RoomType
from delve.presentation.cli import app, config
from delve.presentation.cli.app import CliPrompter, _prompt_index, run_exploration
from delve.presentation.cli.storage import JsonCharacterStore
from delve.services import BACK_OUT, DungeonSession
from delve.services.maze_generator import generate_dungeon
from delve.services.room_resolver import RoomView
from tests.helpers.dungeon_fakes import make_character


def _feed(monkeypatch, answers: list[str]) -> None:
    queue = list(answers)
    monkeypatch.setattr("builtins.input", lambda _prompt="": queue.pop(0))


def test_prompt_index_retries_until_valid(monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["abc", "9", "2"])

    assert _prompt_index(3) == 1
    output = capsys.readouterr().out
    assert "Please enter a number." in output
    assert "between 1 and 3" in output


def test_movement_menu_lists_only_open_directions(monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["2"])

    choice = CliPrompter().prompt_movement(["east", "south"], True)

    assert choice == "south"
    output = capsys.readouterr().out
    assert "1. East" in output
    assert "3. Leave the dungeon" in output
    assert "North" not in output


def test_movement_menu_back_out_option(monkeypatch) -> None:
    _feed(monkeypatch, ["2"])
    assert CliPrompter().prompt_movement(["west"], True) == BACK_OUT


def test_inspect_prompt_accepts_yes_no(monkeypatch) -> None:
    view = RoomView(apparent_type=RoomType.EMPTY, position=Position(1, 1))
    _feed(monkeypatch, ["maybe", "y"])
    assert CliPrompter().ask_inspect(view) is True
    _feed(monkeypatch, ["no"])
    assert CliPrompter().ask_inspect(view) is False


def test_run_exploration_back_out(monkeypatch, capsys) -> None:
    monkeypatch.delenv("DELVE_DEBUG", raising=False)
    rng = RNG(3)
    session = DungeonSession(lambda difficulty: generate_dungeon(3, difficulty, rng))
    dungeon = session.get_or_create(1)
    leave = str(len(dungeon.open_directions()) + 1)
    _feed(monkeypatch, [leave, "y"])

    result = run_exploration(session, make_character(), rng)

    assert result == "fled"
    assert not session.has_dungeon
    assert "=== Dungeon ===" in capsys.readouterr().out


def test_options_menu_saves_size(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(config, "get_user_data_dir", lambda: tmp_path)
    settings = config.default_config()
    _feed(monkeypatch, ["1"])

    app._options_menu(settings)

    assert settings["dungeon_size"] == 3
    assert config.load_config()["dungeon_size"] == 3


def test_main_creates_character_and_quits(monkeypatch, tmp_path, capsys) -> None:
    monkeypatch.setattr(config, "get_user_data_dir", lambda: tmp_path)
    _feed(monkeypatch, ["Ana", "2", "4"])

    app.main()

    output = capsys.readouterr().out
    assert "Ana - Level 1" in output
    assert "Goodbye!" in output
    saved = JsonCharacterStore(tmp_path).load()
    assert saved is not None and saved.name == "Ana"
