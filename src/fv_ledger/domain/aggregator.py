"""Ledger aggregator — pure functions over obligations and payments.

Balances and statements are recomputed from rows on every call; nothing here
is cached or persisted. Rows with record_state DELETED are skipped even if a
caller passes them in.

Statement ordering: ascending by (entry date, created_at, id). OWED entries
are dated by the UTC date of their creation, PAYMENT entries by payment_date.
Running balance adds OWED amounts and subtracts PAYMENT amounts, so the final
running_balance equals balance_owed from compute_balances().
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timezone
from decimal import Decimal

from src.fv_common.datetime_utils import utc_date
from src.fv_common.enums import RecordState, StatementEntryType
from src.fv_common.money import sum_amounts, to_amount
from src.fv_ledger.domain.models import Payment, StatementEntry, WholesalerBalance
from src.fv_settlement.domain.models import Obligation
from src.fv_wholesaler.domain.models import Wholesaler

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)
_ZERO = to_amount(0)


def _active(rows: Iterable) -> list:
    return [r for r in rows if r.record_state == RecordState.ACTIVE.value]


def _aware(value: datetime | None) -> datetime:
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _obligation_date(o: Obligation) -> date:
    return utc_date(o.created_at) if o.created_at else date.min


def compute_balances(
    wholesalers: Sequence[Wholesaler],
    obligations: Iterable[Obligation],
    payments: Iterable[Payment],
) -> list[WholesalerBalance]:
    """One balance per active wholesaler, in the order given.

    Wholesalers with no obligations or payments get zero totals.
    """
    owed: dict[str, list[Decimal]] = defaultdict(list)
    paid: dict[str, list[Decimal]] = defaultdict(list)
    last_paid: dict[str, date] = {}

    for o in _active(obligations):
        owed[o.wholesaler_id].append(o.amount)
    for p in _active(payments):
        paid[p.wholesaler_id].append(p.amount)
        current = last_paid.get(p.wholesaler_id)
        if current is None or p.payment_date > current:
            last_paid[p.wholesaler_id] = p.payment_date

    balances = []
    for w in _active(wholesalers):
        owed_total = sum_amounts(owed.get(w.id, []))
        paid_total = sum_amounts(paid.get(w.id, []))
        balances.append(
            WholesalerBalance(
                wholesaler_id=w.id,
                wholesaler_name=w.name,
                owed_total=owed_total,
                paid_total=paid_total,
                balance_owed=owed_total - paid_total,
                last_payment_date=last_paid.get(w.id),
            )
        )
    return balances


def build_statement(
    obligations: Iterable[Obligation],
    payments: Iterable[Payment],
) -> list[StatementEntry]:
    """Merge one wholesaler's obligations and payments into a running statement."""
    # (sort key, signed amount, entry without running balance)
    rows: list[tuple[tuple, Decimal, StatementEntry]] = []

    for o in _active(obligations):
        amount = to_amount(o.amount)
        entry_date = _obligation_date(o)
        rows.append((
            (entry_date, _aware(o.created_at), o.id),
            amount,
            StatementEntry(
                type=StatementEntryType.OWED.value,
                id=o.id,
                date=entry_date,
                amount=amount,
                running_balance=_ZERO,
                show_id=o.show_id,
                description=o.description,
            ),
        ))

    for p in _active(payments):
        amount = to_amount(p.amount)
        rows.append((
            (p.payment_date, _aware(p.created_at), p.id),
            -amount,
            StatementEntry(
                type=StatementEntryType.PAYMENT.value,
                id=p.id,
                date=p.payment_date,
                amount=amount,
                running_balance=_ZERO,
                reference=p.reference,
            ),
        ))

    rows.sort(key=lambda r: r[0])

    running = _ZERO
    entries = []
    for _, signed, entry in rows:
        running += signed
        entry.running_balance = running
        entries.append(entry)
    return entries
