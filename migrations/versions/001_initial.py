
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('surname', sa.String(length=50), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('number_of_guests', sa.Integer(), nullable=False),
        sa.Column('tables_reserved', sa.Integer(), nullable=False),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('reservation_time', sa.Time(), nullable=False),
        sa.UniqueConstraint('user_id', 'reservation_date', name='uq_reservation_user_date'),
    )
    op.create_index('ix_reservations_user_id', 'reservations', ['user_id'])
    op.create_index('ix_reservations_reservation_date', 'reservations', ['reservation_date'])

    op.create_table(
        'reservation_day_locks',
        sa.Column('day', sa.Date(), primary_key=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='0'),
    )

def downgrade():
    op.drop_table('reservation_day_locks')
    op.drop_index('ix_reservations_reservation_date', table_name='reservations')
    op.drop_index('ix_reservations_user_id', table_name='reservations')
    op.drop_table('reservations')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
