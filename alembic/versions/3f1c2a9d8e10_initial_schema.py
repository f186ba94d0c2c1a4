"""initial_schema

Revision ID: 3f1c2a9d8e10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d8e10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.String(length=24)


def _id_column() -> sa.Column:
    return sa.Column('id', ID, primary_key=True, comment='24 character hex identifier')


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', ID, sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('updated_by', ID, sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        *_timestamp_columns(),
    ]


def _created_at_index(table: str) -> None:
    op.create_index(op.f(f'ix_{table}_created_at'), table, ['created_at'], unique=False)


def _named_table(table: str, length: int = 100, *extra: sa.Column) -> None:
    """Catalogue table with a unique, indexed name."""
    op.create_table(
        table,
        _id_column(),
        sa.Column('name', sa.String(length=length), nullable=False),
        *extra,
        *_audit_columns(),
    )
    op.create_index(op.f(f'ix_{table}_name'), table, ['name'], unique=True)
    _created_at_index(table)


def upgrade() -> None:
    # Accounts and access control
    op.create_table(
        'users',
        _id_column(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('pronouns', sa.String(length=100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_superuser', sa.Boolean(), nullable=False),
        sa.Column('role_id', ID, nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    _created_at_index('users')

    _named_table('permissions')
    _named_table('roles', 50)

    # users.role_id and roles.created_by point at each other
    op.create_foreign_key(
        'fk_users_role_id_roles', 'users', 'roles', ['role_id'], ['id'], ondelete='SET NULL'
    )

    op.create_table(
        'role_permissions',
        sa.Column('role_id', ID, sa.ForeignKey('roles.id', ondelete='CASCADE'), primary_key=True),
        sa.Column(
            'permission_id', ID, sa.ForeignKey('permissions.id', ondelete='CASCADE'), primary_key=True
        ),
    )

    # Catalogue
    _named_table('subjects')
    _named_table('publications')
    _named_table('pronouns')
    for table in ('writers', 'translators'):
        _named_table(
            table,
            100,
            sa.Column('image', sa.String(length=500), nullable=True),
            sa.Column('summary', sa.Text(), nullable=True),
            sa.Column('review', sa.Float(), nullable=False),
        )

    _named_table(
        'books',
        100,
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('best_seller', sa.Boolean(), nullable=False),
        sa.Column('review', sa.Float(), nullable=False),
        sa.Column('page', sa.Integer(), nullable=True),
        sa.Column('edition', sa.Integer(), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('stock_available', sa.Integer(), nullable=False),
        sa.Column('writer_id', ID, sa.ForeignKey('writers.id', ondelete='SET NULL'), nullable=True),
        sa.Column(
            'publication_id', ID, sa.ForeignKey('publications.id', ondelete='SET NULL'), nullable=True
        ),
        sa.Column(
            'translator_id', ID, sa.ForeignKey('translators.id', ondelete='SET NULL'), nullable=True
        ),
    )
    op.create_index(op.f('ix_books_writer_id'), 'books', ['writer_id'], unique=False)
    op.create_index(op.f('ix_books_publication_id'), 'books', ['publication_id'], unique=False)

    op.create_table(
        'book_subjects',
        sa.Column('book_id', ID, sa.ForeignKey('books.id', ondelete='CASCADE'), primary_key=True),
        sa.Column(
            'subject_id', ID, sa.ForeignKey('subjects.id', ondelete='CASCADE'), primary_key=True
        ),
    )

    # Reader activity
    op.create_table(
        'favourite_books',
        _id_column(),
        sa.Column('user_id', ID, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('book_id', ID, sa.ForeignKey('books.id', ondelete='CASCADE'), nullable=False),
        *_timestamp_columns(),
        sa.UniqueConstraint('user_id', 'book_id', name='uq_favourite_user_book'),
    )
    op.create_index(op.f('ix_favourite_books_user_id'), 'favourite_books', ['user_id'], unique=False)
    op.create_index(op.f('ix_favourite_books_book_id'), 'favourite_books', ['book_id'], unique=False)
    _created_at_index('favourite_books')

    op.create_table(
        'recently_visited_books',
        _id_column(),
        sa.Column(
            'user_id', ID, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True
        ),
        sa.Column('book_ids', sa.JSON(), nullable=False),
        *_timestamp_columns(),
    )
    _created_at_index('recently_visited_books')

    # Circulation
    op.create_table(
        'lendings',
        _id_column(),
        sa.Column('user_id', ID, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('book_id', ID, sa.ForeignKey('books.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_by', ID, sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('lent_from', sa.Date(), nullable=False),
        sa.Column('lent_to', sa.Date(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=False),
        sa.Column('returned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('return_remarks', sa.Text(), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index(op.f('ix_lendings_user_id'), 'lendings', ['user_id'], unique=False)
    op.create_index(op.f('ix_lendings_book_id'), 'lendings', ['book_id'], unique=False)
    op.create_index(op.f('ix_lendings_returned_at'), 'lendings', ['returned_at'], unique=False)
    _created_at_index('lendings')

    op.create_table(
        'book_requests',
        _id_column(),
        sa.Column(
            'requested_by', ID, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('writer', sa.String(length=100), nullable=True),
        sa.Column('publication', sa.String(length=100), nullable=True),
        sa.Column('subjects', sa.JSON(), nullable=False),
        sa.Column('edition', sa.String(length=50), nullable=True),
        sa.Column('page', sa.Integer(), nullable=True),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('image_id', sa.String(length=255), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index(
        op.f('ix_book_requests_requested_by'), 'book_requests', ['requested_by'], unique=False
    )
    op.create_index(op.f('ix_book_requests_name'), 'book_requests', ['name'], unique=False)
    _created_at_index('book_requests')

    # Site content
    op.create_table(
        'faqs',
        _id_column(),
        sa.Column('question', sa.String(length=500), nullable=False, unique=True),
        sa.Column('answer', sa.Text(), nullable=False),
        *_audit_columns(),
    )
    _created_at_index('faqs')

    op.create_table(
        'site_documents',
        _id_column(),
        sa.Column('kind', sa.String(length=50), nullable=False, unique=True),
        sa.Column('details', sa.Text(), nullable=False),
        *_audit_columns(),
    )
    _created_at_index('site_documents')


def downgrade() -> None:
    for table in (
        'site_documents',
        'faqs',
        'book_requests',
        'lendings',
        'recently_visited_books',
        'favourite_books',
        'book_subjects',
        'books',
        'translators',
        'writers',
        'pronouns',
        'publications',
        'subjects',
        'role_permissions',
    ):
        op.drop_table(table)

    op.drop_constraint('fk_users_role_id_roles', 'users', type_='foreignkey')
    op.drop_table('roles')
    op.drop_table('permissions')
    op.drop_table('users')
