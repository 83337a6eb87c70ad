"""
CLI command tests.

Verifies:
- Employees can be provisioned, listed and promoted
- The workday reset command requires confirmation
"""

from shiftpet.models import DailyResetMarker, Employee, PetSpecies


class TestEmployeeCommands:

    def test_create_and_list(self, app, db_session):
        runner = app.test_cli_runner()

        result = runner.invoke(args=["employees", "create", "--username", "dana", "--name", "Dana Smith", "--animal", "fish"])
        assert result.exit_code == 0
        assert "PASS Created employee: dana" in result.output

        employee = db_session.query(Employee).filter_by(username="dana").one()
        assert employee.animal_choice is PetSpecies.FISH
        assert employee.is_admin is False

        result = runner.invoke(args=["employees", "list"])
        assert result.exit_code == 0
        assert "Dana Smith" in result.output

    def test_create_duplicate_is_skipped(self, app, employee):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["employees", "create", "--username", "bob", "--name", "Other Bob"])
        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_promote_and_revoke(self, app, db_session, employee):
        runner = app.test_cli_runner()

        result = runner.invoke(args=["employees", "promote", "bob"])
        assert result.exit_code == 0
        assert db_session.query(Employee.is_admin).filter_by(username="bob").scalar() is True

        result = runner.invoke(args=["employees", "promote", "bob", "--revoke"])
        assert result.exit_code == 0
        assert db_session.query(Employee.is_admin).filter_by(username="bob").scalar() is False

    def test_promote_unknown(self, app, db_session):
        result = app.test_cli_runner().invoke(args=["employees", "promote", "ghost"])
        assert result.exit_code != 0
        assert "not found" in result.output


class TestWorkdayCommands:

    def test_reset_aborts_without_confirmation(self, app, db_session):
        result = app.test_cli_runner().invoke(args=["workday", "reset"], input="n\n")
        assert result.exit_code != 0
        assert db_session.query(DailyResetMarker).count() == 0

    def test_reset_and_status(self, app, db_session, employee):
        runner = app.test_cli_runner()

        result = runner.invoke(args=["workday", "reset", "--yes"])
        assert result.exit_code == 0
        assert "PASS Workday reset for" in result.output
        assert db_session.query(DailyResetMarker).count() == 1

        result = runner.invoke(args=["workday", "status"])
        assert result.exit_code == 0
        assert "Last reset:" in result.output
        assert "No work sessions" in result.output
