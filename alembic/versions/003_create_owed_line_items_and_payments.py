"""003: create owed_line_items and payments tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE owed_line_items (
            id                  UUID          PRIMARY KEY DEFAULT gen_random_uuid(),
            show_id             UUID          NOT NULL REFERENCES shows (id) ON DELETE RESTRICT,
            wholesaler_id       UUID          NOT NULL REFERENCES wholesalers (id) ON DELETE RESTRICT,
            amount              NUMERIC(19,4) NOT NULL,
            currency            VARCHAR(3)    NOT NULL DEFAULT 'USD',
            description         TEXT          NOT NULL,
            due_date            DATE,
            status              VARCHAR(20)   NOT NULL DEFAULT 'PENDING',
            calculation_method  VARCHAR(20)   NOT NULL DEFAULT 'MANUAL',
            rate_bps            INTEGER,
            base_amount         NUMERIC(19,4),
            record_state        VARCHAR(10)   NOT NULL DEFAULT 'ACTIVE',
            created_at          TIMESTAMPTZ   NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ   NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_oli_amount_positive       CHECK (amount > 0),
            CONSTRAINT ck_oli_description_not_empty CHECK (length(trim(description)) > 0),
            CONSTRAINT ck_oli_status                CHECK (status IN ('PENDING', 'PARTIALLY_PAID', 'PAID', 'ADJUSTED')),
            CONSTRAINT ck_oli_method                CHECK (calculation_method IN ('MANUAL', 'PERCENT_PAYOUT')),
            CONSTRAINT ck_oli_rate_bps_range        CHECK (rate_bps IS NULL OR rate_bps BETWEEN 0 AND 10000),
            CONSTRAINT ck_oli_base_amount_gte_0     CHECK (base_amount IS NULL OR base_amount >= 0),
            CONSTRAINT ck_oli_method_provenance     CHECK (
                (calculation_method = 'MANUAL'
                    AND rate_bps IS NULL AND base_amount IS NULL)
                OR (calculation_method = 'PERCENT_PAYOUT'
                    AND rate_bps IS NOT NULL AND base_amount IS NOT NULL)
            ),
            CONSTRAINT ck_oli_record_state          CHECK (record_state IN ('ACTIVE', 'DELETED'))
        );
    """)
    op.execute("CREATE INDEX idx_oli_show_id ON owed_line_items (show_id);")
    op.execute("CREATE INDEX idx_oli_wholesaler_created ON owed_line_items (wholesaler_id, created_at);")
    op.execute("""
        CREATE TRIGGER trg_owed_line_items_updated_at
            BEFORE UPDATE ON owed_line_items
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)

    op.execute("""
        CREATE TABLE payments (
            id              UUID          PRIMARY KEY DEFAULT gen_random_uuid(),
            wholesaler_id   UUID          NOT NULL REFERENCES wholesalers (id) ON DELETE RESTRICT,
            show_id         UUID          REFERENCES shows (id) ON DELETE RESTRICT,
            amount          NUMERIC(19,4) NOT NULL,
            currency        VARCHAR(3)    NOT NULL DEFAULT 'USD',
            payment_date    DATE          NOT NULL,
            payment_method  VARCHAR(20)   NOT NULL DEFAULT 'OTHER',
            reference       VARCHAR(255),
            notes           TEXT,
            record_state    VARCHAR(10)   NOT NULL DEFAULT 'ACTIVE',
            created_at      TIMESTAMPTZ   NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ   NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_payments_amount_positive CHECK (amount > 0),
            CONSTRAINT ck_payments_method          CHECK (payment_method IN ('CHECK', 'WIRE', 'ACH', 'CASH', 'CREDIT_CARD', 'OTHER')),
            CONSTRAINT ck_payments_record_state    CHECK (record_state IN ('ACTIVE', 'DELETED'))
        );
    """)
    op.execute("CREATE INDEX idx_payments_show_id ON payments (show_id);")
    op.execute("CREATE INDEX idx_payments_wholesaler_date ON payments (wholesaler_id, payment_date);")
    op.execute("""
        CREATE TRIGGER trg_payments_updated_at
            BEFORE UPDATE ON payments
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON TABLE payments IS 'Payments to wholesalers, summed per wholesaler and not allocated to line items';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS payments CASCADE;")
    op.execute("DROP TABLE IF EXISTS owed_line_items CASCADE;")
