'''
SchoolFinance backend: finance reconciliation and dashboard aggregation
for the school-management dashboard.
'''
from .main import app

__all__ = ["app"]
