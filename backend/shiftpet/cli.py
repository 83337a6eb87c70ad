# Overview: Flask CLI command groups for bootstrap, provisioning, and the daily reset.

# backend/shiftpet/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create any missing tables (use `flask db upgrade` for migrated deployments).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Employee provisioning:
# - python -m flask employees create --username jdoe --name "Jane Doe" [--admin] [--animal dog]
# - python -m flask employees list
# - python -m flask employees promote jdoe [--revoke]
#
# Workday:
# - python -m flask workday reset --yes
#   Force the morning reset now (same effect as the admin endpoint).
# - python -m flask workday status
#   Show the last reset and today's sessions.

import click
from flask.cli import with_appcontext
from sqlalchemy.exc import IntegrityError

from .errors import ShiftPetError
from .extensions import db
from .models import AnimalStats, Employee, PetSpecies, WorkSession
from .services import reset_service
from .services.employee_service import create_employee, get_employee_by_username
from .time_utils import business_now


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet. Existing data is kept."""
    db.create_all()
    click.echo("PASS Database tables ready.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask employees create' to add staff.")


@click.group('employees')
def employees_group():
    """Employee provisioning commands."""


@employees_group.command('create')
@click.option('--username', prompt=True, help='Login name')
@click.option('--name', prompt=True, help='Display name')
@click.option('--admin', 'is_admin', is_flag=True, help='Grant admin privileges')
@click.option('--animal', type=click.Choice(PetSpecies.values()), default=PetSpecies.CAT.value, show_default=True)
@with_appcontext
def create_employee_cli(username, name, is_admin, animal):
    """Create an employee. The pet's stats are created on first login."""
    username = username.strip()
    if get_employee_by_username(username):
        click.echo(f"WARN  Employee '{username}' already exists, skipping...")
        return

    try:
        employee = create_employee(
            username=username,
            name=name.strip(),
            is_admin=is_admin,
            animal_choice=PetSpecies(animal),
        )
    except IntegrityError as e:
        db.session.rollback()
        click.echo(f"FAIL Failed to create employee '{username}': {str(e.orig)}")
        return

    role = "admin" if employee.is_admin else "employee"
    click.echo(f"PASS Created {role}: {employee.username} (ID: {employee.id}) with a {animal}")


@employees_group.command('list')
@with_appcontext
def list_employees():
    """List all employees with their pet stats."""
    rows = (
        db.session.query(Employee, AnimalStats)
        .outerjoin(AnimalStats, AnimalStats.employee_id == Employee.id)
        .order_by(Employee.name, Employee.id)
        .all()
    )

    if not rows:
        click.echo("No employees found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<5} {'Username':<20} {'Name':<24} {'Admin':<6} {'Pet':<8} {'HP':>4} {'Joy':>4}")
    click.echo("="*80)

    for employee, stats in rows:
        admin_str = "Yes" if employee.is_admin else "No"
        health = stats.health if stats else "-"
        happiness = stats.happiness if stats else "-"
        click.echo(
            f"{employee.id:<5} {employee.username:<20} {employee.name:<24} {admin_str:<6} "
            f"{employee.animal_choice.value:<8} {health:>4} {happiness:>4}"
        )

    click.echo("="*80 + "\n")


@employees_group.command('promote')
@click.argument('username')
@click.option('--revoke', is_flag=True, help='Remove admin privileges instead')
@with_appcontext
def promote_employee_cli(username, revoke):
    """Grant (or with --revoke, remove) admin privileges."""
    employee = get_employee_by_username(username)
    if not employee:
        raise click.ClickException(f"Employee '{username}' not found")

    employee.is_admin = not revoke
    db.session.commit()
    action = "Revoked admin from" if revoke else "Granted admin to"
    click.echo(f"PASS {action} {employee.username}")


@click.group('workday')
def workday_group():
    """Daily reset commands."""


@workday_group.command('reset')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def workday_reset(yes):
    """
    Force the morning reset now.

    Every pet goes to full health and zero happiness; today's sessions and
    sales are deleted.
    """
    if not yes:
        click.confirm("WARN This clears today's sessions and sales. Continue?", abort=True)

    try:
        reset_date = reset_service.run_daily_reset()
    except ShiftPetError as e:
        raise click.ClickException(str(e))

    click.echo(f"PASS Workday reset for {reset_date.isoformat()}")


@workday_group.command('status')
@with_appcontext
def workday_status():
    """Show the last reset and who has started a shift today."""
    marker = reset_service.get_marker()
    click.echo(f"Last reset: {marker['reset_date'] or 'never'} (at {marker['reset_at'] or '-'})")

    today = business_now().date()
    sessions = (
        db.session.query(WorkSession, Employee)
        .join(Employee, Employee.id == WorkSession.employee_id)
        .filter(WorkSession.session_date == today)
        .order_by(Employee.name)
        .all()
    )
    if not sessions:
        click.echo(f"No work sessions for {today.isoformat()}.")
        return

    click.echo(f"Work sessions for {today.isoformat()}:")
    for session, employee in sessions:
        met = "MET" if session.goal_met else "open"
        click.echo(
            f"  {employee.username:<20} {float(session.work_hours):>5.2f}h  "
            f"pm {session.current_paid_memberships}/{session.goal_paid_memberships}  "
            f"cc {session.current_credit_cards}/{session.goal_credit_cards}  "
            f"${session.revenue_cents / 100:,.2f}  {met}"
        )


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(employees_group)
    app.cli.add_command(workday_group)
