"""Create books, chapters and verses tables

Revision ID: 3f1c9a7e2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('books',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, comment='Canonical position of the book (1-73)'),
        sa.Column('name', sa.String(length=100), nullable=False, comment='Book name'),
        sa.Column('testament', sa.Enum('OLD', 'NEW', name='testament'), nullable=False),
        sa.Column('total_chapters', sa.Integer(), nullable=False, comment='Number of chapters in the book'),
        sa.CheckConstraint('"order" BETWEEN 1 AND 73', name='ck_books_order_range'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_books_order'), 'books', ['order'], unique=True)
    op.create_index(op.f('ix_books_testament'), 'books', ['testament'], unique=False)

    op.create_table('chapters',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('book_id', sa.Uuid(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False, comment='Chapter number inside the book, starting at 1'),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('book_id', 'number', name='uq_chapters_book_number')
    )
    op.create_index(op.f('ix_chapters_book_id'), 'chapters', ['book_id'], unique=False)

    op.create_table('verses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('chapter_id', sa.Uuid(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False, comment='Verse number inside the chapter, starting at 1'),
        sa.Column('text', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('chapter_id', 'number', name='uq_verses_chapter_number')
    )
    op.create_index(op.f('ix_verses_chapter_id'), 'verses', ['chapter_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_verses_chapter_id'), table_name='verses')
    op.drop_table('verses')
    op.drop_index(op.f('ix_chapters_book_id'), table_name='chapters')
    op.drop_table('chapters')
    op.drop_index(op.f('ix_books_testament'), table_name='books')
    op.drop_index(op.f('ix_books_order'), table_name='books')
    op.drop_table('books')
    sa.Enum(name='testament').drop(op.get_bind(), checkfirst=True)
