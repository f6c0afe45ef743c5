"""Price confidence labels and selection among price observations."""

import logging
from datetime import datetime, timedelta

from .models import PriceLabel, PriceObservation, PriceSource, ResolvedPrice

logger = logging.getLogger(__name__)

# Below this many reports a store-specific price names its store.
STORE_LABEL_MAX_REPORTS = 2
# From this many reports on, a price carries no qualifier.
WELL_ESTABLISHED_REPORTS = 10

PERSONAL_CONFIDENCE = 1.0
AI_CONFIDENCE = 0.5
REPORT_CONFIDENCE_STEP = 0.05
# Crowdsourced confidence decays linearly over this window, down to the
# layer's base confidence.
RECENCY_WINDOW = timedelta(days=90)


def get_price_label(
    price: float | None,
    source: PriceSource | str,
    report_count: int,
    store_name: str | None = None,
) -> PriceLabel:
    """Pick the qualifier shown next to a price.

    Args:
        price: Price being displayed (the label does not depend on it)
        source: Where the price came from
        report_count: Number of independent reports behind the price
        store_name: Store the price was seen at, if known

    Returns:
        PriceLabel with prefix and suffix text
    """
    try:
        source = PriceSource(source)
    except ValueError:
        source = PriceSource.AI_ESTIMATE
    reports = max(report_count or 0, 0)

    if source == PriceSource.AI_ESTIMATE or reports == 0:
        return PriceLabel(prefix="~", suffix="est.")
    if reports <= STORE_LABEL_MAX_REPORTS and store_name:
        return PriceLabel(suffix=f"at {store_name}")
    if reports < WELL_ESTABLISHED_REPORTS:
        return PriceLabel(suffix="avg")
    return PriceLabel()


def _same_store(observation: PriceObservation, store: str | None) -> bool:
    if not store or not observation.store_name:
        return False
    return observation.store_name.strip().lower() == store


def _recency(observation: PriceObservation, floor: float, now: datetime | None) -> float:
    if observation.observed_at is None:
        return 1.0
    reference = now or datetime.now(observation.observed_at.tzinfo)
    age = reference.timestamp() - observation.observed_at.timestamp()
    return min(1.0, max(floor, 1 - age / RECENCY_WINDOW.total_seconds()))


def _observed_at(observation: PriceObservation) -> float:
    if observation.observed_at is None:
        return float("-inf")
    return observation.observed_at.timestamp()


def resolve_price(
    observations: list[PriceObservation],
    store_name: str | None = None,
    ai_estimate: float | None = None,
    now: datetime | None = None,
) -> ResolvedPrice:
    """Choose one price for a variant from everything known about it.

    Personal receipts win over crowdsourced reports, which win over AI
    estimates. Within a layer, prices at the requested store are preferred.
    Crowdsourced confidence decays with the age of the chosen report.

    Args:
        observations: Observations already grouped under one variant key
        store_name: Store the user is shopping at
        ai_estimate: Fallback AI estimate when no observation exists
        now: Reference time for the age of crowdsourced reports; defaults
            to the current time

    Returns:
        ResolvedPrice, with price None when nothing is known
    """
    store = store_name.strip().lower() if store_name else None

    personal = [o for o in observations if o.source == PriceSource.PERSONAL]
    if personal:
        at_store = [o for o in personal if _same_store(o, store)]
        candidates = at_store or personal
        latest = max(candidates, key=_observed_at)
        logger.debug("Resolved personal price %.2f from %d receipts", latest.price, len(candidates))
        return ResolvedPrice(
            price=latest.price,
            source=PriceSource.PERSONAL,
            confidence=PERSONAL_CONFIDENCE,
            store_name=latest.store_name,
            report_count=len(candidates),
        )

    crowdsourced = [o for o in observations if o.source == PriceSource.CROWDSOURCED]
    if crowdsourced:
        store_match = next((o for o in crowdsourced if _same_store(o, store)), None)
        if store_match is not None:
            chosen, base, cap = store_match, 0.6, 0.9
        else:
            chosen, base, cap = min(crowdsourced, key=lambda o: o.price), 0.4, 0.8
        confidence = min(
            cap,
            (base + chosen.report_count * REPORT_CONFIDENCE_STEP) * _recency(chosen, base, now),
        )
        logger.debug(
            "Resolved crowdsourced price %.2f (%d reports, store match: %s)",
            chosen.price,
            chosen.report_count,
            store_match is not None,
        )
        return ResolvedPrice(
            price=chosen.price,
            source=PriceSource.CROWDSOURCED,
            confidence=confidence,
            store_name=chosen.store_name,
            report_count=chosen.report_count,
        )

    estimates = [o.price for o in observations if o.source == PriceSource.AI_ESTIMATE]
    if ai_estimate is not None:
        estimates.append(ai_estimate)
    if estimates:
        return ResolvedPrice(price=min(estimates), confidence=AI_CONFIDENCE)

    return ResolvedPrice()
