"""Initial schema: employees, pets, work sessions, sales, reset marker

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19

This migration adds:
1. Employee (login identity, admin flag, pet species)
2. AnimalStats (one pet per employee; health/happiness range checks)
3. WorkSession (one shift per employee per day with derived goals)
4. Sale (append-only sales ledger)
5. DailyResetMarker (single row recording the last morning reset)
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261019_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # ==========================================================================
    # 1. EMPLOYEES TABLE
    # ==========================================================================
    op.create_table('employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('animal_choice', sa.String(length=16), nullable=False, server_default='cat'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('employees', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_employees_username'), ['username'], unique=True)

    # ==========================================================================
    # 2. ANIMAL STATS TABLE
    # ==========================================================================
    op.create_table('animal_stats',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('health', sa.Integer(), nullable=False, server_default='100'),
        sa.Column('happiness', sa.Integer(), nullable=False, server_default='100'),
        sa.Column('total_revenue_cents', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('last_fed', sa.DateTime(), nullable=False),
        sa.Column('last_health_reset', sa.Date(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('health >= 0 AND health <= 100', name='ck_animal_stats_health_range'),
        sa.CheckConstraint('happiness >= 0 AND happiness <= 100', name='ck_animal_stats_happiness_range'),
        sa.CheckConstraint('total_revenue_cents >= 0', name='ck_animal_stats_revenue_nonneg'),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('animal_stats', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_animal_stats_employee_id'), ['employee_id'], unique=True)

    # ==========================================================================
    # 3. WORK SESSIONS TABLE
    # ==========================================================================
    op.create_table('work_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('session_date', sa.Date(), nullable=False),
        sa.Column('work_hours', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('goal_amount_cents', sa.Integer(), nullable=False),
        sa.Column('goal_paid_memberships', sa.Integer(), nullable=False),
        sa.Column('goal_credit_cards', sa.Integer(), nullable=False),
        sa.Column('current_paid_memberships', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('current_credit_cards', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('revenue_cents', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('goal_met', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('work_hours > 0', name='ck_work_sessions_hours_positive'),
        sa.CheckConstraint('current_paid_memberships >= 0', name='ck_work_sessions_pm_nonneg'),
        sa.CheckConstraint('current_credit_cards >= 0', name='ck_work_sessions_cc_nonneg'),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('employee_id', 'session_date', name='uq_work_sessions_employee_date'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('work_sessions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_work_sessions_employee_id'), ['employee_id'], unique=False)
        batch_op.create_index('ix_work_sessions_date', ['session_date'], unique=False)

    # ==========================================================================
    # 4. SALES TABLE
    # ==========================================================================
    op.create_table('sales',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('session_date', sa.Date(), nullable=False),
        sa.Column('revenue_cents', sa.Integer(), nullable=False),
        sa.Column('has_credit_card', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('has_paid_membership', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('has_warranty', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('overridden_high_value', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('revenue_cents > 0', name='ck_sales_revenue_positive'),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('sales', schema=None) as batch_op:
        batch_op.create_index('ix_sales_employee_date', ['employee_id', 'session_date'], unique=False)
        batch_op.create_index('ix_sales_date', ['session_date'], unique=False)

    # ==========================================================================
    # 5. DAILY RESET MARKER
    # ==========================================================================
    op.create_table('daily_reset_markers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('reset_date', sa.Date(), nullable=True),
        sa.Column('reset_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('daily_reset_markers')

    with op.batch_alter_table('sales', schema=None) as batch_op:
        batch_op.drop_index('ix_sales_date')
        batch_op.drop_index('ix_sales_employee_date')
    op.drop_table('sales')

    with op.batch_alter_table('work_sessions', schema=None) as batch_op:
        batch_op.drop_index('ix_work_sessions_date')
        batch_op.drop_index(batch_op.f('ix_work_sessions_employee_id'))
    op.drop_table('work_sessions')

    with op.batch_alter_table('animal_stats', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_animal_stats_employee_id'))
    op.drop_table('animal_stats')

    with op.batch_alter_table('employees', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_employees_username'))
    op.drop_table('employees')
