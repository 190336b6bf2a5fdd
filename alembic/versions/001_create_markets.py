"""001: create markets table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE markets (
            id                      VARCHAR(64)         PRIMARY KEY,
            applicant_profile_id    VARCHAR(64)         NOT NULL,
            school_name             VARCHAR(255)        NOT NULL,
            decision_type           VARCHAR(8)          NOT NULL,
            decision_date           VARCHAR(64),
            current_odds_yes        DOUBLE PRECISION    NOT NULL DEFAULT 50,
            current_odds_no         DOUBLE PRECISION    NOT NULL DEFAULT 50,
            total_volume            DOUBLE PRECISION    NOT NULL DEFAULT 0,
            unique_participants     INT                 NOT NULL DEFAULT 0,
            status                  VARCHAR(16)         NOT NULL DEFAULT 'open',
            actual_result           VARCHAR(16),
            resolved_at             TIMESTAMPTZ,
            closed_at               TIMESTAMPTZ,
            created_at              TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            updated_at              TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_markets_odds_range CHECK (
                current_odds_yes BETWEEN 5 AND 95
                AND current_odds_no BETWEEN 5 AND 95
            ),
            CONSTRAINT ck_markets_volume_gte_0 CHECK (total_volume >= 0),
            CONSTRAINT ck_markets_status CHECK (status IN ('open', 'closed', 'resolved')),
            CONSTRAINT ck_markets_decision_type CHECK (
                decision_type IN ('EA', 'ED', 'ED2', 'REA', 'RD')
            ),
            CONSTRAINT ck_markets_result CHECK (
                actual_result IS NULL OR actual_result IN ('accepted', 'rejected')
            )
        );
    """)
    op.execute("CREATE INDEX idx_markets_status_volume ON markets (status, total_volume DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS markets CASCADE;")
