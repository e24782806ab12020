"""init accounts schema

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19 10:12:41.502113
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('ROLE_USER', 'ROLE_ADMIN', 'ROLE_MODERATOR', name='userrole')
user_status = sa.Enum('STATUS_DEFAULT', 'STATUS_BLOCKED', 'STATUS_UNBLOCKED', name='userstatus')
user_visibility = sa.Enum('STATUS_ONLINE', 'STATUS_OFFLINE', name='uservisibility')
currency = sa.Enum('USD', 'EUR', 'UAH', 'CZK', 'PLN', name='currency')
card_type = sa.Enum('VISA', 'MASTERCARD', name='cardtype')
card_status = sa.Enum('STATUS_CARD_DEFAULT', 'STATUS_CARD_BLOCKED', 'STATUS_CARD_UNBLOCKED', name='cardstatus')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_role', user_role, nullable=False),
        sa.Column('status', user_status, nullable=False),
        sa.Column('visibility', user_visibility, nullable=False),
        sa.Column('name', sa.String(length=10), nullable=False),
        sa.Column('surname', sa.String(length=15), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('country_of_origin', sa.String(length=60), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('avatar', sa.String(length=512), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=False),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'])
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'currency_data',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('rate', sa.Numeric(precision=18, scale=6), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_currency_data_id'), 'currency_data', ['id'])
    op.create_index(op.f('ix_currency_data_currency'), 'currency_data', ['currency'], unique=True)

    op.create_table(
        'user_currency_data',
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('currency_data_id', sa.Integer(), sa.ForeignKey('currency_data.id', ondelete='CASCADE'),
                  primary_key=True),
    )

    op.create_table(
        'bank_loans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False,
                  unique=True),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_bank_loans_id'), 'bank_loans', ['id'])

    op.create_table(
        'cards',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('card_number', sa.String(length=16), nullable=False),
        sa.Column('cvv', sa.Integer(), nullable=False),
        sa.Column('pin', sa.Integer(), nullable=False),
        sa.Column('balance', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('holder_name', sa.String(length=30), nullable=False),
        sa.Column('iban', sa.String(length=34), nullable=False),
        sa.Column('swift', sa.String(length=11), nullable=False),
        sa.Column('account_number', sa.String(length=10), nullable=False),
        sa.Column('currency_type', currency, nullable=False),
        sa.Column('card_type', card_type, nullable=False),
        sa.Column('status', card_status, nullable=False),
        sa.Column('card_expiration_date', sa.Date(), nullable=False),
        sa.Column('recipient_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_cards_id'), 'cards', ['id'])
    op.create_index(op.f('ix_cards_card_number'), 'cards', ['card_number'], unique=True)
    op.create_index(op.f('ix_cards_user_id'), 'cards', ['user_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('content', sa.String(length=100), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('sender_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.CheckConstraint('char_length(content) BETWEEN 1 AND 100', name='ck_messages_content_length'),
    )
    op.create_index(op.f('ix_messages_id'), 'messages', ['id'])
    op.create_index(op.f('ix_messages_sender_id'), 'messages', ['sender_id'])
    op.create_index(op.f('ix_messages_receiver_id'), 'messages', ['receiver_id'])

    op.create_table(
        'transfers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('reference_number', sa.String(length=36), nullable=False),
        sa.Column('sender_card_id', sa.Integer(), sa.ForeignKey('cards.id', ondelete='SET NULL'), nullable=True),
        sa.Column('receiver_card_id', sa.Integer(), sa.ForeignKey('cards.id', ondelete='SET NULL'),
                  nullable=True),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_transfers_id'), 'transfers', ['id'])
    op.create_index(op.f('ix_transfers_reference_number'), 'transfers', ['reference_number'], unique=True)


def downgrade() -> None:
    op.drop_table('transfers')
    op.drop_table('messages')
    op.drop_table('cards')
    op.drop_table('bank_loans')
    op.drop_table('user_currency_data')
    op.drop_table('currency_data')
    op.drop_table('users')

    # enum types outlive their tables in PostgreSQL
    for enum_type in (card_status, card_type, currency, user_visibility, user_status, user_role):
        enum_type.drop(op.get_bind(), checkfirst=True)
