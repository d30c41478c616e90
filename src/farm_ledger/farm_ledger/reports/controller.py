from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import current_month_key, is_month_key, shift_month
from ..common.responses import json_error, json_ok
from ..container import Container
from ..core.constants import DEFAULT_REPORT_MONTHS
from ..core.exceptions import UnknownReferenceError, ValidationError


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _range() -> tuple[str, str]:
        # default window: the last year up to `end`
        end = request.args.get("end") or current_month_key()
        start = request.args.get("start") or (shift_month(end, 1 - DEFAULT_REPORT_MONTHS) if is_month_key(end) else end)
        return start, end

    def _flag(name: str) -> bool:
        return (request.args.get(name) or "").lower() in {"1", "true", "yes"}

    def _handle(fn):
        try:
            return json_ok(fn())
        except UnknownReferenceError as e:
            return json_error(str(e), 404)
        except ValidationError as e:
            return json_error(str(e))

    @app.route("/api/reports/workers", methods=["GET"], endpoint="report_workers")
    def report_workers():
        start, end = _range()
        return _handle(lambda: reports.worker_costs(start=start, end=end, only_with_cost=_flag("only_with_cost")))

    @app.route("/api/reports/monthly/<month>", methods=["GET"], endpoint="report_monthly")
    def report_monthly(month: str):
        return _handle(lambda: reports.monthly_report(month))

    @app.route("/api/reports/activities", methods=["GET"], endpoint="report_activities")
    def report_activities():
        start, end = _range()
        return _handle(lambda: reports.activity_costs(start=start, end=end))

    @app.route("/api/reports/areas", methods=["GET"], endpoint="report_areas")
    def report_areas():
        start, end = _range()
        return _handle(lambda: reports.area_costs(start=start, end=end))

    @app.route("/api/reports/groups", methods=["GET"], endpoint="report_groups")
    def report_groups():
        start, end = _range()
        return _handle(lambda: reports.group_costs(start=start, end=end))

    @app.route("/api/reports/labour/<month>", methods=["GET"], endpoint="report_labour")
    def report_labour(month: str):
        return _handle(lambda: reports.labour_cost_by_group(month))

    @app.route("/api/expenses/<month>/summary", methods=["GET"], endpoint="expense_summary")
    def expense_summary(month: str):
        return _handle(lambda: reports.expense_summary(month))

    @app.route("/api/expenses/<expense_id>/allocation", methods=["GET"], endpoint="expense_allocation")
    def expense_allocation(expense_id: str):
        return _handle(lambda: reports.expense_allocation(expense_id))

    @app.route("/api/payments/<month>/summary", methods=["GET"], endpoint="payment_summary")
    def payment_summary(month: str):
        return _handle(lambda: reports.payment_summary(month))

    @app.route("/api/balances/<month>", methods=["GET"], endpoint="balance_report")
    def balance_report(month: str):
        return _handle(lambda: reports.balance_report(month, include_trivial=_flag("all")))

    @app.route("/api/balances/<month>/groups/<group_id>", methods=["GET"], endpoint="group_balance")
    def group_balance(month: str, group_id: str):
        return _handle(lambda: reports.month_balance(group_id, month))

    @app.route("/api/balances/<month>/groups/<group_id>/history", methods=["GET"], endpoint="group_balance_history")
    def group_balance_history(month: str, group_id: str):
        return _handle(lambda: reports.balance_history(group_id, month))
