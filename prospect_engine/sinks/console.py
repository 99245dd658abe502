"""Console sink for inspecting analyses."""

import json
from typing import Any

from prospect_engine.models import PropertyAnalysisResult
from prospect_engine.sinks.serialization import to_dict


class ConsoleSink:
    """Output analyses to console (stdout)."""

    def __init__(self, verbose: bool = False, pretty: bool = True) -> None:
        """Initialize console sink.

        Parameters
        ----------
        verbose : bool
            Print the full JSON document after the summary.
        pretty : bool
            Pretty-print JSON output.
        """
        self.verbose = verbose
        self.pretty = pretty
        self._count = 0

    def write_analysis(self, result: PropertyAnalysisResult) -> None:
        """Print a readable summary of one analysis."""
        valuation = result.valuation
        print(f"\n{'='*60}")
        print(f"Analysis {result.analysis_id}")
        print("=" * 60)
        print(f"Property:        {result.attributes.size_sqm:g} sqm, {result.attributes.current_usage}")
        if result.attributes.location:
            print(f"Location:        {result.attributes.location}")
        print(f"Current value:   {valuation.current_value:,}")
        print(f"Market value:    {valuation.market_value:,}")
        print(f"Estimated worth: {valuation.estimated_worth:,}")
        print(f"Appreciation:    {valuation.appreciation_rate}% per year")

        for warning in result.warnings:
            print(f"! {warning}")

        if result.rejected:
            print("Image rejected: no prospects generated")
        else:
            scope = "all categories" if result.cross_category else result.usage_category.value
            print(f"\nProspects ({scope}):")
            for p in result.prospects:
                payback = f"{p.payback_period_years}y" if p.payback_period_years is not None else "n/a"
                print(
                    f"  {p.rank}. {p.title} [{p.category.value}] "
                    f"ROI {p.expected_roi}% | investment {p.total_investment:,} | payback {payback}"
                )

        if self.verbose:
            self._print_json(to_dict(result))

        self._count += 1

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to console."""
        print(f"\n{'='*60}")
        print(f"Entity: {entity_type} ({len(records)} records)")
        print("=" * 60)
        for record in records:
            self._print_json(to_dict(record))
        self._count += len(records)

    def close(self) -> None:
        """Print summary and close."""
        print(f"\nConsole sink: {self._count} records written")

    def _print_json(self, data: dict) -> None:
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            print(json.dumps(data, ensure_ascii=False))
