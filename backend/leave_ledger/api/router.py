from fastapi import APIRouter

from leave_ledger.api.calendar import calendar_router
from leave_ledger.api.employees import employees_router
from leave_ledger.api.leaves import leaves_router
from leave_ledger.api.renewals import renewals_router
from leave_ledger.api.stats import stats_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(stats_router)
api_router.include_router(leaves_router)
api_router.include_router(renewals_router)
api_router.include_router(calendar_router)
