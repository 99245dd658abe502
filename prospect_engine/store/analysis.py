"""Saved analysis store with per-user indexes."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from prospect_engine.exceptions import AnalysisNotFoundError, PersistenceError
from prospect_engine.models import AnalysisStatus, PropertyAnalysisResult, SavedAnalysis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisAnalytics:
    """Usage statistics over a user's saved analyses."""

    total_analyses: int
    favorites_count: int
    average_roi: float
    top_categories: tuple[tuple[str, int], ...]
    monthly_activity: tuple[tuple[str, int], ...]


@dataclass
class AnalysisStore:
    """In-memory store for saved analyses keyed by ``analysis_id``.

    Saving is idempotent: saving a result whose ``analysis_id`` is
    already stored replaces the result and keeps the user's bookkeeping
    (favorite flag, notes, status).
    """

    analyses: dict[str, SavedAnalysis] = field(default_factory=dict)

    # Relationship indexes
    _user_analyses: dict[str, list[str]] = field(default_factory=dict)

    def save(
        self,
        user_id: str,
        result: PropertyAnalysisResult,
        image_ref: str | None = None,
    ) -> str:
        """Save an analysis result for a user.

        Returns
        -------
        str
            The analysis id.

        Raises
        ------
        PersistenceError
            If ``user_id`` is empty or the analysis belongs to another user.
        """
        if not user_id:
            raise PersistenceError("user_id is required")

        existing = self.analyses.get(result.analysis_id)
        if existing is not None:
            if existing.user_id != user_id:
                raise PersistenceError(f"Analysis {result.analysis_id} belongs to another user")
            existing.result = result
            if image_ref is not None:
                existing.image_ref = image_ref
            existing.updated_at = datetime.now()
            return result.analysis_id

        self.analyses[result.analysis_id] = SavedAnalysis(
            analysis_id=result.analysis_id,
            user_id=user_id,
            result=result,
            image_ref=image_ref,
            created_at=result.created_at or datetime.now(),
        )
        self._user_analyses.setdefault(user_id, []).append(result.analysis_id)
        logger.debug("Saved analysis %s for user %s", result.analysis_id, user_id)
        return result.analysis_id

    def load(self, analysis_id: str) -> PropertyAnalysisResult:
        """Get a stored analysis result."""
        return self.get_record(analysis_id).result

    def get_record(self, analysis_id: str) -> SavedAnalysis:
        """Get a stored analysis with its bookkeeping."""
        record = self.analyses.get(analysis_id)
        if record is None:
            raise AnalysisNotFoundError(f"Analysis {analysis_id} not found")
        return record

    def list_for_user(
        self,
        user_id: str,
        status: AnalysisStatus | None = None,
    ) -> list[SavedAnalysis]:
        """Get a user's analyses, newest first."""
        records = [self.analyses[i] for i in self._user_analyses.get(user_id, [])]
        if status is not None:
            records = [r for r in records if r.status == status]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def list_favorites(self, user_id: str) -> list[SavedAnalysis]:
        """Get a user's favorite analyses, newest first."""
        return [r for r in self.list_for_user(user_id) if r.is_favorite]

    def set_favorite(self, analysis_id: str, is_favorite: bool = True) -> SavedAnalysis:
        record = self.get_record(analysis_id)
        record.is_favorite = is_favorite
        record.updated_at = datetime.now()
        return record

    def toggle_favorite(self, analysis_id: str) -> bool:
        """Flip the favorite flag and return the new value."""
        record = self.get_record(analysis_id)
        return self.set_favorite(analysis_id, not record.is_favorite).is_favorite

    def add_notes(self, analysis_id: str, notes: str) -> SavedAnalysis:
        record = self.get_record(analysis_id)
        record.notes = notes
        record.updated_at = datetime.now()
        return record

    def set_status(self, analysis_id: str, status: AnalysisStatus | str) -> SavedAnalysis:
        """Change the lifecycle status of an analysis.

        Raises
        ------
        PersistenceError
            If ``status`` is not a known status.
        """
        try:
            status = AnalysisStatus(status)
        except ValueError as exc:
            raise PersistenceError(f"Unknown analysis status: {status!r}") from exc

        record = self.get_record(analysis_id)
        record.status = status
        record.updated_at = datetime.now()
        return record

    def delete(self, analysis_id: str) -> None:
        record = self.get_record(analysis_id)
        del self.analyses[analysis_id]
        self._user_analyses[record.user_id].remove(analysis_id)

    def archive_old(
        self,
        age_days: int = 90,
        now: datetime | None = None,
        user_id: str | None = None,
    ) -> int:
        """Archive analyses older than ``age_days``.

        Favorites and already archived analyses are left untouched.

        Parameters
        ----------
        age_days : int
            Minimum age of an analysis to archive.
        now : datetime | None
            Reference time. Defaults to the current time.
        user_id : str | None
            Restrict archival to one user.

        Returns
        -------
        int
            Number of analyses archived.
        """
        now = now or datetime.now()
        cutoff = now - timedelta(days=age_days)

        records = self.list_for_user(user_id) if user_id else list(self.analyses.values())
        archived = 0
        for record in records:
            if record.is_favorite or record.status == AnalysisStatus.ARCHIVED:
                continue
            if record.created_at < cutoff:
                record.status = AnalysisStatus.ARCHIVED
                record.updated_at = now
                archived += 1

        if archived:
            logger.info("Archived %d analyses older than %d days", archived, age_days)
        return archived

    def analytics(self, user_id: str, now: datetime | None = None) -> AnalysisAnalytics:
        """Summarize a user's analyses.

        Average ROI is taken over every prospect of every analysis. Top
        categories count identified category labels, at most five.
        Monthly activity covers the six months up to ``now``.
        """
        records = self.list_for_user(user_id)
        rois = [p.expected_roi for r in records for p in r.result.prospects]

        categories = Counter(
            r.result.identified_category.label for r in records if r.result.identified_category is not None
        )

        now = now or datetime.now()
        per_month = Counter(r.created_at.strftime("%Y-%m") for r in records)
        months = []
        year, month = now.year, now.month
        for _ in range(6):
            months.append(f"{year:04d}-{month:02d}")
            year, month = (year, month - 1) if month > 1 else (year - 1, 12)

        return AnalysisAnalytics(
            total_analyses=len(records),
            favorites_count=sum(1 for r in records if r.is_favorite),
            average_roi=round(sum(rois) / len(rois), 2) if rois else 0.0,
            top_categories=tuple(categories.most_common(5)),
            monthly_activity=tuple((m, per_month.get(m, 0)) for m in reversed(months)),
        )

    def summary(self) -> dict[str, int]:
        """Get counts of stored analyses by status."""
        counts = Counter(r.status.value for r in self.analyses.values())
        return {"analyses": len(self.analyses), **{s.value: counts.get(s.value, 0) for s in AnalysisStatus}}
