# models/Intent_schema.py
from enum import Enum


class IntentCategory(str, Enum):
    ACCOUNT_INQUIRY = "account_inquiry"
    LOAN_INQUIRY = "loan_inquiry"
    FRAUD_REPORT = "fraud_report"
    INVESTMENT_HELP = "investment_help"
    DISPUTE = "dispute"
    GENERAL = "general"
    # Reserved, the classifier never returns it
    OTHER = "other"
