"""Built-in tag suggestions."""

from typing import Iterable, List

from ledger.schemas.tag import TagSuggestion


SUGGESTED_TAGS = [
    TagSuggestion(suggest_id="salary", name="Salary", color="green"),
    TagSuggestion(suggest_id="loan", name="Loan", color="red"),
    TagSuggestion(suggest_id="credit-card", name="Credit Card", color="purple"),
    TagSuggestion(suggest_id="rent", name="Rent", color="lime"),
    TagSuggestion(suggest_id="maintenance", name="Maintenance", color="orange"),
    TagSuggestion(suggest_id="bill", name="Bill", color="blue"),
]


def available_suggestions(tags: Iterable) -> List[TagSuggestion]:
    """Suggestions whose suggest_id is not used by any of the given tags."""
    used = {tag.suggest_id for tag in tags if tag.suggest_id}
    return [s for s in SUGGESTED_TAGS if s.suggest_id not in used]
