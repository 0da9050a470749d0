"""Console-driven UI loops for Delve."""
from __future__ import annotations

import secrets
from functools import partial
from typing import List, Literal, Sequence

from delve.core.rng import RNG
from delve.core.types import Direction, SessionResult
from delve.domain.dungeon import ALLOWED_SIZES, Dungeon, RoomType
from delve.domain.entities import Character, Stats
from delve.domain.items import Item
from delve.logging_config import configure_logging
from delve.presentation.cli import config
from delve.presentation.cli.render import render_bullet_lines, render_dungeon, render_heading, render_menu
from delve.presentation.cli.storage import JsonCharacterStore, JsonDungeonStore, load_or_discard
from delve.services import (
    BACK_OUT,
    BossDefeatedEvent,
    CombatResolvedEvent,
    DungeonSession,
    ExplorationLoop,
    ItemFoundEvent,
    MazeGenerator,
    NothingFoundEvent,
    RoomEvent,
    RoomResolver,
    RoomView,
    TrapTriggeredEvent,
)
from delve.services.combat_service import (
    AttackResolvedEvent,
    CombatAction,
    CombatEndedEvent,
    CombatEvent,
    CombatService,
    CombatView,
    EscapeAttemptEvent,
    GuardAppliedEvent,
    HealedEvent,
    NoHealingItemEvent,
)
from delve.services.factories import generate_item
from delve.services.interfaces import BackOut

MenuAction = Literal["explore", "character", "options", "quit"]
_MAX_RANDOM_SEED = 2**31 - 1
_DIRECTION_LABELS = {"north": "North", "east": "East", "south": "South", "west": "West"}
_RESULT_MESSAGES = {
    "completed": "The boss falls. You leave the dungeon victorious!",
    "fled": "You escape the dungeon. Its halls shift behind you.",
    "died": "You have fallen. You wake at the dungeon gate, battered but alive.",
}

STARTING_STATS = Stats(max_hp=20, hp=20, attack=5, defense=2)


def main() -> None:
    """Start the interactive CLI session."""
    configure_logging()
    settings = config.load_config()
    character_store = JsonCharacterStore()
    dungeon_store = JsonDungeonStore()
    load_or_discard(dungeon_store)
    character = load_or_discard(character_store) or _create_character(character_store)
    rng = RNG(secrets.randbelow(_MAX_RANDOM_SEED))
    session = DungeonSession(
        partial(_generate, rng, settings),
        store=dungeon_store,
    )
    print("=== Delve ===")
    while True:
        action = _main_menu_loop()
        if action == "quit":
            break
        if action == "character":
            _render_character(character)
        elif action == "options":
            _options_menu(settings)
        else:
            result = run_exploration(session, character, rng, character_store)
            print(_RESULT_MESSAGES[result])
            if result == "died":
                character.stats.hp = character.stats.max_hp
            character_store.save(character)
    print("Goodbye!")


def _generate(rng: RNG, settings: dict, difficulty: int) -> Dungeon:
    return MazeGenerator(rng).generate(settings["dungeon_size"], difficulty)


def run_exploration(
    session: DungeonSession,
    character: Character,
    rng: RNG,
    character_store: JsonCharacterStore | None = None,
) -> SessionResult:
    """Wire the CLI collaborators into an exploration loop and run it."""
    prompter = CliPrompter()
    combat = CombatService(rng, _prompt_combat_action, _render_combat_events)
    resolver = RoomResolver(
        session=session,
        combat=combat,
        item_generator=partial(_generate_item, rng),
        prompter=prompter,
        rng=rng,
        character_store=character_store,
    )
    loop = ExplorationLoop(session=session, resolver=resolver, renderer=render_dungeon, prompter=prompter)
    return loop.run(character)


def _generate_item(rng: RNG, level: int) -> Item:
    return generate_item(level, rng)


def _main_menu_loop() -> MenuAction:
    options: List[tuple[str, MenuAction]] = [
        ("Enter the Dungeon", "explore"),
        ("Inspect Character", "character"),
        ("Options", "options"),
        ("Quit", "quit"),
    ]
    render_menu("Main Menu", [label for label, _ in options])
    index = _prompt_index(len(options))
    return options[index][1]


def _create_character(store: JsonCharacterStore) -> Character:
    name = input("Enter hero name (default Hero): ").strip() or "Hero"
    stats = Stats(
        max_hp=STARTING_STATS.max_hp,
        hp=STARTING_STATS.hp,
        attack=STARTING_STATS.attack,
        defense=STARTING_STATS.defense,
    )
    character = Character(name=name, level=1, stats=stats)
    store.save(character)
    return character


def _render_character(character: Character) -> None:
    render_heading(f"{character.name} - Level {character.level}")
    print(f"HP {character.stats.hp}/{character.stats.max_hp}  ATK {character.stats.attack}  DEF {character.stats.defense}")
    print(f"XP {character.xp}/{character.level * 100}")
    if not character.inventory:
        print("Inventory is empty.")
        return
    render_bullet_lines(f"{item.name} ({item.rarity}) - {item.description}" for item in character.inventory)


def _options_menu(settings: dict) -> None:
    sizes = list(ALLOWED_SIZES)
    render_menu(
        f"Dungeon Size (current {settings['dungeon_size']})",
        [f"{size} x {size}" for size in sizes],
    )
    settings["dungeon_size"] = sizes[_prompt_index(len(sizes))]
    config.save_config(settings)
    print("New size applies to the next dungeon.")


def _prompt_index(count: int, message: str = "Select an option: ") -> int:
    while True:
        raw = input(message).strip()
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if 0 <= index < count:
            return index
        print(f"Please enter a value between 1 and {count}.")


def _prompt_yes_no(message: str) -> bool:
    while True:
        raw = input(f"{message} (y/n): ").strip().lower()
        if raw in ("y", "yes"):
            return True
        if raw in ("n", "no"):
            return False
        print("Please answer y or n.")


class CliPrompter:
    """Terminal implementation of the movement and room prompts."""

    def prompt_movement(self, available: Sequence[Direction], allow_back_out: bool) -> Direction | BackOut:
        options: List[tuple[str, Direction | BackOut]] = [
            (_DIRECTION_LABELS[direction], direction) for direction in available
        ]
        if allow_back_out:
            options.append(("Leave the dungeon", BACK_OUT))
        render_menu("Where to?", [label for label, _ in options])
        return options[_prompt_index(len(options))][1]

    def confirm_back_out(self) -> bool:
        return _prompt_yes_no("Leave the dungeon? It will not be here when you return.")

    def show_events(self, events: Sequence[RoomEvent]) -> None:
        for event in events:
            if isinstance(event, ItemFoundEvent):
                print(f"- You found {event.item.name} ({event.item.rarity}).")
            elif isinstance(event, NothingFoundEvent):
                print("- There is nothing here.")
            elif isinstance(event, TrapTriggeredEvent):
                print("- The floor gives way! You tumble out of the dungeon.")
            elif isinstance(event, CombatResolvedEvent):
                if event.success:
                    print(f"- {event.enemy_name} is defeated.")
                elif event.fled:
                    print(f"- You run from {event.enemy_name}.")
            elif isinstance(event, BossDefeatedEvent):
                print(f"- {event.enemy_name}, master of this dungeon, is no more.")
            else:
                print(f"- {event}")

    def ask_inspect(self, view: RoomView) -> bool:
        render_heading("Empty Room")
        print("The room seems empty.")
        return _prompt_yes_no("Inspect the room?")

    def confirm_fight(self, view: RoomView) -> None:
        render_heading("Boss" if view.apparent_type is RoomType.BOSS else "Enemy")
        print(f"A {view.enemy_name} blocks your way (HP {view.enemy_hp}).")
        input("Press Enter to fight...")

    def reveal_chest(self, view: RoomView, item: Item | None) -> None:
        if item is None:
            render_heading("Treasure")
            print("A closed chest sits in the middle of the room.")
            input("Press Enter to open it...")
            return
        print(f"The lid creaks open: {item.name} ({item.rarity}).")


def _prompt_combat_action(view: CombatView) -> CombatAction:
    options: List[tuple[str, CombatAction]] = [("Attack", "attack"), ("Defend", "defend")]
    if view.can_heal:
        options.append(("Use Healing Item", "item"))
    options.append(("Run", "run"))
    print(
        f"\n{view.character_name} HP {view.character_hp}/{view.character_max_hp}"
        f"  vs  {view.enemy_name} HP {view.enemy_hp}/{view.enemy_max_hp}"
    )
    render_menu("Actions", [label for label, _ in options])
    return options[_prompt_index(len(options), "Choose action: ")][1]


def _render_combat_events(events: Sequence[CombatEvent]) -> None:
    for event in events:
        if isinstance(event, AttackResolvedEvent):
            print(
                f"- {event.attacker_name} hits {event.target_name} for {event.damage} damage "
                f"(HP now {event.target_hp})."
            )
        elif isinstance(event, GuardAppliedEvent):
            print(f"- {event.combatant_name} braces for the next blow.")
        elif isinstance(event, HealedEvent):
            print(f"- You drink {event.item_name} and recover {event.amount} HP (HP now {event.hp}).")
        elif isinstance(event, NoHealingItemEvent):
            print("- You have no healing items!")
        elif isinstance(event, EscapeAttemptEvent):
            print("- You escape!" if event.success else "- You fail to escape!")
        elif isinstance(event, CombatEndedEvent):
            if event.victor == "character":
                print(f"- Victory! Gained {event.xp_gained} XP.")
                if event.levels_gained:
                    print(f"- Level up! (+{event.levels_gained})")
        else:
            print(f"- {event}")
