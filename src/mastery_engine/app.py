"""Interactive CLI application."""
import logging
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from mastery_engine.config import config
from mastery_engine.dashboard import get_progress_color, get_student_dashboard
from mastery_engine.db import DEFAULT_DB_PATH, init_db
from mastery_engine.errors import MasteryEngineError
from mastery_engine.importer import import_file
from mastery_engine.leaderboard import rank_students
from mastery_engine.logging_config import configure_logging
from mastery_engine.models import EASY, HARD, MEDIUM
from mastery_engine.results import get_results
from mastery_engine.rewards import RewardContext, evaluate_rules, total_adjustment
from mastery_engine.seed import is_seeded, seed_all
from mastery_engine.settings import get_reward_rules, get_skill_ranks, get_system_config
from mastery_engine.skills import get_skills
from mastery_engine.students import get_students, recalculate_stats, reset_skill_progress, submit_attempt

logger = logging.getLogger(__name__)

console = Console()


def show_welcome():
    console.print(Panel(
        "[bold]Mastery Engine[/bold]\n[dim]Skill mastery, streaks and rewards[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("dashboard", "Student progress, rank and badges"),
        ("leaderboard", "Rank a grade by mastery"),
        ("practice", "Record an answer for a student"),
        ("rules", "List reward rules and preview them"),
        ("import", "Load skills, students or results"),
        ("reset", "Clear a student's progress on one skill"),
        ("recalc", "Rebuild a student's cached stats"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def choose_student(db_path: str) -> str | None:
    students = get_students(db_path)
    if not students:
        console.print("[yellow]No students yet. Use 'import' to add some.[/yellow]")
        return None
    for s in students:
        console.print(f"  [cyan]{s.id}[/cyan]) {s.display_name or s.name}")
    return Prompt.ask("Student", choices=[s.id for s in students])


def choose_skill(db_path: str) -> str | None:
    skills = get_skills(db_path)
    if not skills:
        console.print("[yellow]No skills yet. Use 'import' to add some.[/yellow]")
        return None
    for s in skills:
        console.print(f"  [cyan]{s.id}[/cyan]) {s.skill_name} [dim]({s.difficulty})[/dim]")
    return Prompt.ask("Skill", choices=[s.id for s in skills])


def cmd_dashboard(db_path: str):
    student_id = choose_student(db_path)
    if student_id is None:
        return
    data = get_student_dashboard(db_path, student_id)
    student = data["student"]
    rank = data["rank"]
    header = f"{rank.icon} [bold]{rank.name}[/bold] — {data['total_xp']} XP"
    if data["next_rank"]:
        nxt = data["next_rank"]
        header += f"  [dim](next: {nxt.name} at {nxt.threshold:g} XP)[/dim]"
    console.print(Panel(header, title=student.display_name or student.name, border_style="blue"))

    console.print(
        f"\n  Streak: [bold]{data['streak']}[/bold] days  |  "
        f"Mastered: [bold]{data['skills_mastered']}[/bold]  |  "
        f"Answered: [bold]{data['questions_answered']}[/bold]  |  "
        f"Accuracy: [bold]{data['accuracy']}%[/bold]\n"
    )

    table = Table(title="Skills")
    table.add_column("Skill", style="cyan")
    table.add_column("Progress", justify="right")
    table.add_column("Rank")
    table.add_column("Status")
    for row in data["skills"]:
        color = get_progress_color(row["progress"], row["is_mastered"])
        status = "MASTERED" if row["is_mastered"] else f"{row['progress']}%"
        table.add_row(
            f"{row['subject']}: {row['name']}" if row["subject"] else row["name"],
            row["label"],
            f"{row['rank'].icon} {row['rank'].name}",
            f"[{color}]{status}[/{color}]",
        )
    console.print(table)

    if data["badges"]:
        console.print("\n[bold]Badges:[/bold] " + "  ".join(f"{b.icon} {b.name}" for b in data["badges"]))


def cmd_leaderboard(db_path: str):
    grade = Prompt.ask("Grade")
    skill_id = None
    if Confirm.ask("Rank by a single skill?", default=False):
        skill_id = choose_skill(db_path)
    entries = rank_students(
        get_students(db_path), grade, get_skills(db_path),
        get_system_config(db_path), get_skill_ranks(db_path),
        lambda sid: get_results(db_path, student_id=sid),
        skill_id=skill_id,
    )
    if not entries:
        console.print(f"[yellow]No students enrolled in {grade}.[/yellow]")
        return
    table = Table(title=f"Leaderboard — {grade}")
    table.add_column("#", justify="right")
    table.add_column("Student", style="cyan")
    table.add_column("Progress" if skill_id else "Mastered", justify="right")
    for e in entries[:config.LEADERBOARD_LIMIT]:
        value = f"{e.progress_percent:.0f}%" if skill_id else str(e.mastered_count)
        table.add_row(str(e.rank), e.display_name or e.name, value)
    console.print(table)


def cmd_practice(db_path: str):
    student_id = choose_student(db_path)
    if student_id is None:
        return
    skill_id = choose_skill(db_path)
    if skill_id is None:
        return
    correct = Confirm.ask("Was the answer correct?")
    question_id = Prompt.ask("Question id [dim](optional)[/dim]", default="") or None
    seconds = FloatPrompt.ask("Seconds taken", default=15.0)
    outcome = submit_attempt(db_path, student_id, skill_id, correct, question_id, seconds)

    for label, points in outcome.breakdown:
        console.print(f"  [dim]{label:<14}[/dim] +{points}")
    for effect in outcome.effects:
        color = "green" if effect.effect_points >= 0 else "red"
        console.print(f"  [{color}]{effect.message or effect.rule.name}: {effect.effect_points:+d}[/{color}]")
    console.print(f"[bold]Score: {outcome.record.score}[/bold]  ({outcome.status.progress_label})")
    if outcome.newly_mastered:
        console.print(Panel("[bold green]Skill mastered![/bold green]", border_style="green"))


def cmd_rules(db_path: str):
    rules = get_reward_rules(db_path)
    table = Table(title="Reward Rules")
    table.add_column("Id")
    table.add_column("Name", style="cyan")
    table.add_column("Condition")
    table.add_column("Effect", justify="right")
    for r in rules:
        sign = "+" if r.effect_type == "REWARD" else "-"
        table.add_row(r.id, r.name, f"{r.trigger_type} {r.condition_operator} {r.condition_value}", f"{sign}{r.points}")
    console.print(table)

    if not Confirm.ask("Preview an attempt?", default=False):
        return
    context = RewardContext(
        score=FloatPrompt.ask("Score", default=100.0),
        streak=IntPrompt.ask("Streak", default=1),
        difficulty=Prompt.ask("Difficulty", choices=[EASY, MEDIUM, HARD], default=EASY),
        accuracy=FloatPrompt.ask("Accuracy %", default=100.0),
    )
    effects = evaluate_rules(context, rules)
    if not effects:
        console.print("[dim]No rules fire.[/dim]")
        return
    for effect in effects:
        console.print(f"  {effect.rule.name}: [bold]{effect.effect_points:+d}[/bold]")
    console.print(f"[bold]Total adjustment: {total_adjustment(effects):+d}[/bold]")


def cmd_import(db_path: str):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    result = import_file(db_path, file_path)
    summary = ", ".join(f"{n} {section}" for section, n in result["counts"].items())
    console.print(f"[green]Imported {result['filename']} → {summary}[/green]")


def cmd_reset(db_path: str):
    student_id = choose_student(db_path)
    if student_id is None:
        return
    skill_id = choose_skill(db_path)
    if skill_id is None:
        return
    if not Confirm.ask(f"Delete all attempts for {student_id} on {skill_id}?", default=False):
        return
    stats = reset_skill_progress(db_path, student_id, skill_id)
    console.print(f"[green]Progress reset.[/green] Skills mastered: {stats.skills_mastered}")


def cmd_recalc(db_path: str):
    student_id = choose_student(db_path)
    if student_id is None:
        return
    stats = recalculate_stats(db_path, student_id)
    console.print(
        f"[green]Stats rebuilt:[/green] {stats.total_questions} answered, "
        f"{stats.correct_questions} correct, {stats.skills_mastered} mastered"
    )


COMMANDS = {
    "dashboard": cmd_dashboard,
    "leaderboard": cmd_leaderboard,
    "practice": cmd_practice,
    "rules": cmd_rules,
    "import": cmd_import,
    "reset": cmd_reset,
    "recalc": cmd_recalc,
}


def main():
    configure_logging(console=console)
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    first_run = not is_seeded(db_path)
    if first_run:
        console.print("[dim]Setting up for first use...[/dim]")
    seed_all(db_path)
    if first_run:
        console.print("[green]Ready![/green]\n")

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="dashboard").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]Keep practicing![/dim]")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(db_path)
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except MasteryEngineError as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
