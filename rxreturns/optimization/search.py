"""Search mode: build product lines from NDC search terms instead of the pharmacy's list."""

from typing import Iterable, Optional, Sequence

from rxreturns.models.data import PriceObservation, ProductLine
from rxreturns.utils.ndc import ndc_prefix_match, normalize_ndc


def resolve_search_lines(
    terms: Sequence[str],
    observations: Iterable[PriceObservation],
    product_list: Sequence[ProductLine] = (),
    quantities: Optional[Sequence[int]] = None,
) -> list[ProductLine]:
    """Map each term to the observed NDCs it prefix-matches (in either direction).

    Every matched NDC becomes one line. On an exact product-list match the name comes from the
    list; otherwise it is "Product <ndc>". Quantities passed for the terms always win; without
    them a product-list match keeps its listed quantity and anything else defaults to 1. A term
    with no observed match yields nothing.
    """
    observed: list[str] = []
    for obs in observations:
        ndc = normalize_ndc(obs.ndc)
        if ndc and ndc not in observed:
            observed.append(ndc)
    by_ndc = {normalize_ndc(item.ndc): item for item in product_list}

    lines: list[ProductLine] = []
    seen: set[str] = set()
    for idx, term in enumerate(terms):
        default_qty = quantities[idx] if quantities is not None else 1
        for ndc in observed:
            if ndc in seen or not ndc_prefix_match(term, ndc):
                continue
            seen.add(ndc)
            known = by_ndc.get(ndc)
            if known is not None and quantities is None:
                lines.append(known.model_copy(update={"ndc": ndc}))
            else:
                lines.append(
                    ProductLine(
                        ndc=ndc,
                        product_name=known.product_name if known is not None else None,
                        quantity=default_qty,
                    )
                )
    return lines
