"""002: create bets table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bets (
            id              VARCHAR(64)         PRIMARY KEY,
            market_id       VARCHAR(64)         NOT NULL REFERENCES markets (id),
            user_id         VARCHAR(64)         NOT NULL,
            prediction      VARCHAR(3)          NOT NULL,
            amount          DOUBLE PRECISION    NOT NULL,
            odds_at_bet     DOUBLE PRECISION    NOT NULL,
            payout          BIGINT              NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_bets_prediction CHECK (prediction IN ('yes', 'no')),
            CONSTRAINT ck_bets_amount_gt_0 CHECK (amount > 0),
            CONSTRAINT ck_bets_payout_gte_0 CHECK (payout >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_bets_market_created ON bets (market_id, created_at DESC);")
    op.execute("CREATE INDEX idx_bets_user ON bets (user_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bets CASCADE;")
