"""CLI entry point: Click + Rich."""

from __future__ import annotations

import logging
import sys
import time
from typing import NoReturn

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import Config, ConfigError
from .domain.case import (
    Case,
    get_clues_pointing_to,
    get_killer,
    get_living_suspects,
    get_location_by_id,
    get_suspect,
    get_victim,
)
from .domain.types import SuspectId
from .events import GameEventEmitter
from .game import panel_puzzle as pp
from .game.persistence import SaveStore, autosave_listener
from .game.reducer import (
    ConfirmAccusation,
    DiscoverClue,
    EndInterrogation,
    ExamineLocation,
    NextStatement,
    PresentEvidence,
    SearchLocation,
    SetAccusation,
    StartAccusation,
    StartGame,
    StartInterrogation,
)
from .game.state import (
    Accusation,
    GameState,
    create_initial_game_state,
    current_statement,
    derive_testimonies,
    has_discovered_clue,
    undiscovered_clues_here,
)
from .game.statements import is_contradictable
from .game.store import create_store
from .generation.case_generator import CaseGenerationError, CaseGeneratorConfig, generate_case
from .generation.random import create_random


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Black Rabbit: a seeded murder-mystery engine."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-5s %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _console(machine_output: bool) -> Console:
    # Rich goes to stderr so stdout stays machine-readable
    if machine_output:
        return Console(file=sys.stderr, no_color=True)
    return Console()


def _fail(
    console: Console,
    message: str,
    emitter: GameEventEmitter | None = None,
    command: str | None = None,
    label: str = "Error",
) -> NoReturn:
    console.print(f"[red]{label}:[/red] {message}")
    if emitter is not None:
        emitter.error(f"{label}: {message}", command=command)
    raise SystemExit(1)


def _load_config(
    console: Console,
    emitter: GameEventEmitter | None = None,
    command: str | None = None,
    **overrides,
) -> Config:
    try:
        return Config.load(**overrides)
    except ConfigError as e:
        _fail(console, str(e), emitter, command, label="Config error")


def _generate(
    console: Console,
    seed: str,
    config: Config,
    emitter: GameEventEmitter | None = None,
    command: str | None = None,
) -> Case:
    try:
        return generate_case(
            seed,
            CaseGeneratorConfig(suspect_count=config.suspect_count, difficulty=config.difficulty),
        )
    except CaseGenerationError as e:
        _fail(console, str(e), emitter, command)


# -- case ---------------------------------------------------------------------


@main.command()
@click.argument("seed")
@click.option("--suspects", "-n", type=int, default=None, help="Number of suspects (>= 3).")
@click.option(
    "--difficulty", "-d", default=None, help="easy, medium or hard (more red herrings)."
)
@click.option("--reveal", is_flag=True, default=False, help="Show the killer, motive and weapon.")
@click.option("--json", "json_output", is_flag=True, default=False, help="Print the case as JSON.")
def case(seed: str, suspects: int | None, difficulty: str | None, reveal: bool, json_output: bool):
    """Generate the case for SEED.

    \b
    Examples:
      black-rabbit case moonlit-manor
      black-rabbit case moonlit-manor --suspects 8 --difficulty hard
      black-rabbit case moonlit-manor --reveal
      black-rabbit case moonlit-manor --json > case.json
    """
    console = _console(json_output)
    config = _load_config(console, suspects_override=suspects, difficulty_override=difficulty)
    generated = _generate(console, seed, config)

    if json_output:
        click.echo(generated.model_dump_json(by_alias=True, indent=2))
        return

    victim = get_victim(generated)
    scene = get_location_by_id(generated, generated.crime_scene)
    console.print(
        Panel(
            f"[bold]{victim.full_name if victim else 'Unknown'}[/bold] was found dead in the "
            f"[cyan]{scene.name if scene else 'manor'}[/cyan] around "
            f"{generated.time_of_death.label}.",
            title=f"Case {seed}",
        )
    )

    table = Table(title="Suspects")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Occupation")
    table.add_column("Age", justify="right")
    for suspect in get_living_suspects(generated):
        table.add_row(suspect.id, suspect.full_name, suspect.occupation, str(suspect.age))
    console.print(table)

    console.print(f"Rooms: {', '.join(loc.name for loc in generated.locations)}")
    console.print(f"Clues to find: {len(generated.clues)}")

    if reveal:
        killer = get_killer(generated)
        console.print(f"[red]Killer:[/red] {killer.full_name if killer else '?'} ({generated.killer})")
        console.print(f"[red]Motive:[/red] {generated.motive.value}")
        console.print(f"[red]Weapon:[/red] {generated.weapon.value}")
        for clue in get_clues_pointing_to(generated, generated.killer):
            console.print(f"  [dim]{clue.id}[/dim] {clue.name}")


# -- testimony ----------------------------------------------------------------


@main.command()
@click.argument("seed")
@click.option("--suspect", "-s", "suspect_id", default=None, help="Only this suspect (e.g. suspect-2).")
@click.option("--reveal", is_flag=True, default=False, help="Mark statements evidence can break.")
def testimony(seed: str, suspect_id: str | None, reveal: bool):
    """Print what each living suspect says about the night of the murder.

    \b
    Examples:
      black-rabbit testimony moonlit-manor
      black-rabbit testimony moonlit-manor --suspect suspect-2 --reveal
    """
    console = Console()
    config = _load_config(console)
    generated = _generate(console, seed, config)
    testimonies = derive_testimonies(generated)

    if suspect_id is not None and SuspectId(suspect_id) not in testimonies:
        _fail(console, f"no living suspect {suspect_id!r}")

    for sid, entry in testimonies.items():
        if suspect_id is not None and sid != suspect_id:
            continue
        suspect = get_suspect(generated, sid)
        console.print(f"\n[bold]{suspect.full_name if suspect else sid}[/bold] [dim]({sid})[/dim]")
        for index, statement in enumerate(entry.statements, 1):
            marker = " [red](contradictable)[/red]" if reveal and is_contradictable(statement) else ""
            console.print(f"  {index}. ({statement.topic.value}) {statement.text}{marker}")


# -- puzzle -------------------------------------------------------------------


def _render_board(state: pp.PanelPuzzleState) -> str:
    return "\n".join(" ".join(pp.panel_symbol(panel) for panel in row) for row in state.grid)


@main.command()
@click.option("--seed", default=None, help="Board seed (default: current time).")
@click.option("--target", type=int, default=None, help="Score needed to win.")
@click.option("--time", "time_limit", type=int, default=None, help="Seconds on the clock.")
@click.option("--moves", type=int, default=30, show_default=True, help="Maximum moves to play.")
@click.option("--json-events", is_flag=True, default=False, help="Output NDJSON events to stdout.")
def puzzle(seed: str | None, target: int | None, time_limit: int | None, moves: int, json_events: bool):
    """Autoplay one round of the evidence panel puzzle.

    \b
    Each move takes the first swap that makes a match and counts as one
    second on the clock.

    \b
    Examples:
      black-rabbit puzzle --seed rainy-night
      black-rabbit puzzle --target 500 --time 90 --moves 50
      black-rabbit puzzle --json-events
    """
    console = _console(json_events)
    emitter = GameEventEmitter(enabled=json_events)
    config = _load_config(
        console, emitter, "puzzle", target_override=target, time_override=time_limit
    )

    board_seed = seed or f"puzzle-{int(time.time())}"
    random = create_random(board_seed)
    state = pp.create_panel_puzzle(
        random,
        target_score=config.puzzle_target_score,
        time_remaining=config.puzzle_time_limit,
    )

    played = 0
    try:
        while played < moves and not pp.is_game_over(state):
            move = pp.find_valid_move(state)
            if move is None:
                state = pp.check_board(state)
                break
            state = pp.select_panel(state, *move.from_)
            result = pp.try_swap(state, *move.to)
            if not result.swapped:
                break
            before = result.state.score
            state = pp.resolve_cascade(result.state, random)
            state = pp.tick(state, 1.0)
            played += 1
            emitter.puzzle_match(score=state.score, gained=state.score - before, combo=state.combo)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow] (Ctrl+C)")
        raise SystemExit(130)

    won = pp.is_game_won(state)
    tokens = pp.tokens_earned(state)
    emitter.puzzle_complete(score=state.score, target=state.target_score, won=won, tokens=tokens)

    console.print(_render_board(state))
    outcome = "[green]Solved![/green]" if won else "[yellow]Time's up.[/yellow]"
    console.print(
        f"{outcome} Score {state.score}/{state.target_score} after {played} moves. "
        f"Search tokens earned: {tokens}"
    )


# -- play ---------------------------------------------------------------------


def _investigate(store, emitter: GameEventEmitter) -> None:
    state = store.get_state()
    for location in state.case.locations:
        state = store.dispatch(ExamineLocation(location.id))
        while remaining := undiscovered_clues_here(state):
            clue = remaining[0]
            action = SearchLocation() if state.search_tokens > 0 else DiscoverClue(clue.id)
            state = store.dispatch(action)
            emitter.clue_found(clue.id, clue.name, location.id)


def _interrogate(store, emitter: GameEventEmitter) -> dict[SuspectId, int]:
    """Question every living suspect, objecting whenever a found clue breaks a statement."""
    exposed: dict[SuspectId, int] = {}
    state = store.get_state()
    for suspect_id, entry in state.testimonies.items():
        state = store.dispatch(StartInterrogation(suspect_id))
        for _ in entry.statements:
            statement = current_statement(state)
            if statement is not None and is_contradictable(statement):
                evidence = next(
                    (c for c in statement.contradicted_by if has_discovered_clue(state, c)), None
                )
                if evidence is not None:
                    state = store.dispatch(PresentEvidence(evidence, statement))
                    exposed[suspect_id] = exposed.get(suspect_id, 0) + 1
                    emitter.contradiction(suspect_id, statement.id, evidence)
            state = store.dispatch(NextStatement())
        state = store.dispatch(EndInterrogation())
    return exposed


def _accuse(store, accused: SuspectId) -> GameState:
    state = store.get_state()
    supporting = tuple(
        c.id
        for c in state.case.clues
        if c.points_to == accused and has_discovered_clue(state, c.id)
    )
    store.dispatch(StartAccusation())
    store.dispatch(
        SetAccusation(
            Accusation(accused_id=accused, motive=state.case.motive, supporting_evidence=supporting)
        )
    )
    return store.dispatch(ConfirmAccusation())


@main.command()
@click.argument("seed")
@click.option("--accuse", "accuse_id", default=None, help="Suspect to accuse (default: most exposed).")
@click.option("--json-events", is_flag=True, default=False, help="Output NDJSON events to stdout.")
def play(seed: str, accuse_id: str | None, json_events: bool):
    """Play SEED from start to verdict with a scripted detective.

    \b
    Searches every room, questions every suspect, objects with the first
    clue that breaks a statement, then accuses. Progress is autosaved.

    \b
    Examples:
      black-rabbit play moonlit-manor
      black-rabbit play moonlit-manor --accuse suspect-3
    """
    console = _console(json_events)
    emitter = GameEventEmitter(enabled=json_events)
    config = _load_config(console, emitter, "play")
    generated = _generate(console, seed, config, emitter, "play")
    emitter.case_generated(
        seed, len(generated.suspects), len(generated.clues), config.difficulty.value
    )

    if accuse_id is not None and get_suspect(generated, SuspectId(accuse_id)) is None:
        _fail(console, f"unknown suspect {accuse_id!r}", emitter, "play")

    saves = SaveStore(config.save_path)
    store = create_store(create_initial_game_state(generated))
    # Resolution is never written, so the last snapshot is the accusation.
    snapshots: list[GameState] = []
    store.subscribe(autosave_listener(saves, seed, on_save=snapshots.append))

    phase = store.get_state().phase

    def _on_phase(state: GameState) -> None:
        nonlocal phase
        if state.phase != phase:
            emitter.phase_changed(phase.value, state.phase.value)
            phase = state.phase

    store.subscribe(_on_phase)

    try:
        store.dispatch(StartGame())
        _investigate(store, emitter)
        exposed = _interrogate(store, emitter)
        if accuse_id is None:
            accused = max(exposed, key=exposed.get) if exposed else get_living_suspects(generated)[0].id
        else:
            accused = SuspectId(accuse_id)
        final = _accuse(store, accused)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow] (Ctrl+C)")
        raise SystemExit(130)

    if snapshots:
        emitter.game_saved(seed, str(saves.path), snapshots[-1].phase.value)

    result = final.result
    name = get_suspect(generated, accused)
    console.print(f"Accused: [bold]{name.full_name if name else accused}[/bold]")
    if result is not None and result.won:
        console.print("[green]Case closed.[/green] The killer has been caught.")
    else:
        killer = get_killer(generated)
        console.print(
            f"[red]Wrong suspect.[/red] The killer was {killer.full_name if killer else '?'}."
        )
    if result is not None:
        console.print(
            f"Clues {result.clues_found}/{result.total_clues}, "
            f"contradictions {result.contradictions_found}/{result.total_contradictions}"
        )
    if snapshots:
        console.print(
            f"[dim]Saved the {snapshots[-1].phase.value} state to {saves.path}[/dim]"
        )
    else:
        console.print(f"[yellow]Progress could not be saved to {saves.path}[/yellow]")


# -- save slot ----------------------------------------------------------------


@main.command("save-info")
def save_info():
    """Show the saved game, if any."""
    console = Console()
    config = _load_config(console)
    saves = SaveStore(config.save_path)
    loaded = saves.load()
    if loaded is None:
        console.print("No saved game.")
        return
    state = loaded.state
    console.print(f"[green]Seed:[/green] {loaded.seed}")
    console.print(f"[green]Phase:[/green] {state.phase.value}")
    console.print(
        f"[green]Clues:[/green] {len(state.player_knowledge.discovered_clues)}/{len(state.case.clues)}"
    )
    console.print(f"[green]Search tokens:[/green] {state.search_tokens}")
    console.print(f"[green]Mistakes:[/green] {state.mistake_count}/{state.max_mistakes}")


@main.command("clear-save")
def clear_save():
    """Delete the saved game."""
    console = Console()
    config = _load_config(console)
    saves = SaveStore(config.save_path)
    if not saves.has_saved_game():
        console.print("No saved game.")
        return
    if not saves.clear():
        _fail(console, f"could not delete {saves.path}")
    console.print("Save cleared.")


if __name__ == "__main__":
    main()
