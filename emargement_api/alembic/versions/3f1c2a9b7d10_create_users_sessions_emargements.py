"""Create users, sessions and emargements tables

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-18 10:12:31.481205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.CheckConstraint("role IN ('formateur', 'etudiant')", name='ck_users_role'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('formateur_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['formateur_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_sessions_id'), 'sessions', ['id'], unique=False)
    op.create_index(op.f('ix_sessions_formateur_id'), 'sessions', ['formateur_id'], unique=False)

    # One attendance record per (session, student)
    op.create_table(
        'emargements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('etudiant_id', sa.Integer(), nullable=False),
        sa.Column('presence', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['etudiant_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id', 'etudiant_id', name='uq_emargements_session_etudiant'),
    )
    op.create_index(op.f('ix_emargements_id'), 'emargements', ['id'], unique=False)
    op.create_index(op.f('ix_emargements_session_id'), 'emargements', ['session_id'], unique=False)
    op.create_index(op.f('ix_emargements_etudiant_id'), 'emargements', ['etudiant_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_emargements_etudiant_id'), table_name='emargements')
    op.drop_index(op.f('ix_emargements_session_id'), table_name='emargements')
    op.drop_index(op.f('ix_emargements_id'), table_name='emargements')
    op.drop_table('emargements')
    op.drop_index(op.f('ix_sessions_formateur_id'), table_name='sessions')
    op.drop_index(op.f('ix_sessions_id'), table_name='sessions')
    op.drop_table('sessions')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
