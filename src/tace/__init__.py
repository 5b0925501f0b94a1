# tace - Activity-rate (TACE) dashboard for staffing spreadsheets
__version__ = "1.0.0"
