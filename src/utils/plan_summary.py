from __future__ import annotations

from domain.crates import ConversionResult, SelectedCrate, SelectionResult, SiloBalance

from .formatting import format_decimal, format_delta


def _format_row(cells: tuple[str, ...], widths: list[int]) -> str:
    # First column left-aligned, numbers right-aligned.
    return " ".join(
        f"{text:<{width}}" if idx == 0 else f"{text:>{width}}" for idx, (text, width) in enumerate(zip(cells, widths))
    )


def _render_table(headers: tuple[str, ...], rows: list[tuple[str, ...]]) -> list[str]:
    widths = [max(len(header), max((len(row[idx]) for row in rows), default=0)) for idx, header in enumerate(headers)]
    header = _format_row(headers, widths)
    lines = [header, "-" * len(header)]
    lines.extend(_format_row(row, widths) for row in rows)
    lines.append("-" * len(header))
    return lines


def _crate_rows(crates: list[SelectedCrate]) -> list[tuple[str, ...]]:
    return [
        (
            str(crate.epoch),
            format_decimal(crate.amount),
            format_decimal(crate.bdv),
            format_decimal(crate.seeds),
            format_decimal(crate.stalk),
        )
        for crate in crates
    ]


def render_selection(selection: SelectionResult) -> str:
    lines = ["Selected crates:"]
    if not selection.crates:
        lines.append("  (empty)")
        return "\n".join(lines)
    lines.extend(_render_table(("Epoch", "Amount", "BDV", "Seeds", "Stalk"), _crate_rows(selection.crates)))
    lines.append(
        f"Total amount={format_decimal(selection.total_amount)} bdv={format_decimal(selection.total_bdv)} "
        f"stalk={format_decimal(selection.total_stalk)} seeds={format_decimal(selection.total_seeds)}"
    )
    return "\n".join(lines)


def render_conversion(result: ConversionResult) -> str:
    lines = [
        f"Convert {format_decimal(result.amount)} {result.from_asset} -> "
        f"{format_decimal(result.amount_out)} {result.to_asset}",
        render_selection(result.consumed),
        f"Minted crate epoch={result.minted_crate.epoch} bdv={format_decimal(result.minted_crate.bdv)} "
        f"seeds={format_decimal(result.minted_crate.seeds)} stalk={format_decimal(result.minted_crate.stalk)}",
        f"  BDV:   {format_delta(result.delta_bdv)}",
        f"  Stalk: {format_delta(result.delta_stalk)}",
        f"  Seeds: {format_delta(result.delta_seeds)} ({format_delta(result.seeds_per_bdv_delta)} per BDV)",
    ]
    return "\n".join(lines)


def render_balance(balance: SiloBalance) -> str:
    rows = [
        ("Deposited", format_decimal(balance.deposited.amount), str(len(balance.deposited.crates))),
        ("Locked", format_decimal(balance.locked.amount), str(len(balance.locked.records))),
        ("Claimable", format_decimal(balance.claimable.amount), str(len(balance.claimable.records))),
    ]
    lines = [f"{balance.asset_id} silo balance (bdv={format_decimal(balance.deposited.bdv)}):"]
    lines.extend(_render_table(("Bucket", "Amount", "Entries"), rows))
    return "\n".join(lines)


__all__ = ["render_balance", "render_conversion", "render_selection"]
