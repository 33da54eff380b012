# services/intent_service.py
from typing import Sequence, Tuple

from models.Intent_schema import IntentCategory

# Evaluated top to bottom, first match wins. Order is significant: a message
# mentioning both a loan and fraud is a loan_inquiry.
INTENT_KEYWORDS: Tuple[Tuple[IntentCategory, Tuple[str, ...]], ...] = (
    (IntentCategory.ACCOUNT_INQUIRY, ("balance", "deposit", "withdrawal", "checking", "savings")),
    (IntentCategory.LOAN_INQUIRY, ("loan", "mortgage", "credit", "borrow", "interest rate", "refinance")),
    (IntentCategory.FRAUD_REPORT, ("fraud", "suspicious", "unauthorized", "stolen", "scam", "security")),
    (IntentCategory.INVESTMENT_HELP, ("invest", "portfolio", "stocks", "bonds", "retirement", "401k")),
    (IntentCategory.DISPUTE, ("dispute", "charge", "error", "incorrect", "wrong", "complaint")),
)


def classify_intent(
    message: str,
    rules: Sequence[Tuple[IntentCategory, Sequence[str]]] = INTENT_KEYWORDS,
) -> IntentCategory:
    """
    Return the first category whose keywords appear as a substring of the
    lowercased message, or GENERAL when nothing matches.
    """
    lowered = message.lower()
    for intent, keywords in rules:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return IntentCategory.GENERAL
