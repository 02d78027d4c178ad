"""create user, game, score and comment tables

Revision ID: 5c2a9d41e7b0
Revises:
Create Date: 2025-11-02 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9d41e7b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    # Databases created with `flask db-reset` already have the tables
    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.String(length=15), primary_key=True),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('name', sa.String(length=64), nullable=True),
            sa.Column('created', sa.DateTime(), nullable=False),
            sa.Column('updated', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_user_email', 'user', ['email'], unique=True)

    if 'game' not in existing_tables:
        op.create_table(
            'game',
            sa.Column('id', sa.String(length=15), primary_key=True),
            sa.Column('name', sa.String(length=128), nullable=False),
            sa.Column('pack', sa.String(length=128), nullable=True),
            sa.Column('img', sa.String(length=512), nullable=True),
            sa.Column('created', sa.DateTime(), nullable=False),
            sa.Column('updated', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_game_name', 'game', ['name'])

    if 'score' not in existing_tables:
        op.create_table(
            'score',
            sa.Column('id', sa.String(length=15), primary_key=True),
            sa.Column('user_id', sa.String(length=15), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('game_id', sa.String(length=15), sa.ForeignKey('game.id'), nullable=False),
            sa.Column('score', sa.Float(), nullable=False),
            sa.Column('created', sa.DateTime(), nullable=False),
            sa.Column('updated', sa.DateTime(), nullable=False),
            sa.UniqueConstraint('user_id', 'game_id', name='uq_score_user_game'),
        )
        op.create_index('ix_score_user_id', 'score', ['user_id'])
        op.create_index('ix_score_game_id', 'score', ['game_id'])

    if 'comment' not in existing_tables:
        op.create_table(
            'comment',
            sa.Column('id', sa.String(length=15), primary_key=True),
            sa.Column('comment', sa.Text(), nullable=False),
            sa.Column('user_id', sa.String(length=15), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('game_id', sa.String(length=15), sa.ForeignKey('game.id'), nullable=False),
            sa.Column('created', sa.DateTime(), nullable=False),
            sa.Column('updated', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_comment_user_id', 'comment', ['user_id'])
        op.create_index('ix_comment_game_id', 'comment', ['game_id'])


def downgrade():
    op.drop_table('comment')
    op.drop_table('score')
    op.drop_table('game')
    op.drop_table('user')
