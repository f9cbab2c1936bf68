"""
Tests for daily sales report generation and lookup.
"""

from datetime import date, datetime, timedelta

import pytest

from storefront import db, user_service
from storefront.exceptions import ResourceNotFoundException
from storefront.models import DailySalesReport, UserPurchase, utcnow

REPORT_DATE = date(2024, 5, 1)


def _purchase(user_id, store_product_id, quantity, when):
    db.session.add(UserPurchase(
        user_id=user_id,
        store_product_id=store_product_id,
        quantity=quantity,
        purchase_date=when,
    ))


@pytest.fixture
def purchases(app_ctx, ids):
    """
    Purchases around REPORT_DATE, including both window edges.
    """
    _purchase(ids["alice"], ids["downtown_coffee"], 2, datetime(2024, 5, 1, 0, 0, 0))
    _purchase(ids["alice"], ids["downtown_tea"], 4, datetime(2024, 5, 1, 23, 59, 59))
    _purchase(ids["admin"], ids["airport_coffee"], 1, datetime(2024, 5, 1, 12, 30))
    # outside the window
    _purchase(ids["alice"], ids["downtown_coffee"], 1, datetime(2024, 4, 30, 23, 59, 59))
    _purchase(ids["alice"], ids["airport_coffee"], 1, datetime(2024, 5, 2, 0, 0, 0))
    db.session.commit()


class TestGenerateDailySalesReports:
    """Test the per-store aggregation job."""

    def test_totals_per_store(self, purchases, ids):
        created = user_service.generate_daily_sales_reports(REPORT_DATE)

        totals = {r["storeName"]: r["totalSales"] for r in created}
        assert totals == {"Downtown": pytest.approx(38.0), "Airport": pytest.approx(12.0)}
        assert all(r["reportDate"] == "2024-05-01" for r in created)

    def test_store_without_sales_gets_zero_report(self, app_ctx):
        created = user_service.generate_daily_sales_reports(REPORT_DATE)

        assert len(created) == 2
        assert all(r["totalSales"] == 0.0 for r in created)

    def test_second_run_is_skipped(self, purchases):
        first = user_service.generate_daily_sales_reports(REPORT_DATE)
        second = user_service.generate_daily_sales_reports(REPORT_DATE)

        assert len(first) == 2
        assert second == []
        assert DailySalesReport.query.filter_by(report_date=REPORT_DATE).count() == 2

    def test_only_missing_stores_are_reported(self, purchases, ids):
        db.session.add(DailySalesReport(store_id=ids["downtown"], report_date=REPORT_DATE, total_sales=1.0))
        db.session.commit()

        created = user_service.generate_daily_sales_reports(REPORT_DATE)

        assert [r["storeName"] for r in created] == ["Airport"]
        existing = DailySalesReport.query.filter_by(store_id=ids["downtown"]).one()
        assert existing.total_sales == 1.0

    def test_defaults_to_yesterday(self, app_ctx, ids):
        yesterday = utcnow().date() - timedelta(days=1)
        _purchase(ids["alice"], ids["downtown_tea"], 2,
                  datetime.combine(yesterday, datetime.min.time()) + timedelta(hours=10))
        db.session.commit()

        created = user_service.generate_daily_sales_reports()

        downtown = next(r for r in created if r["storeName"] == "Downtown")
        assert downtown["reportDate"] == yesterday.isoformat()
        assert downtown["totalSales"] == pytest.approx(9.0)


class TestGetDailySalesReports:
    """Test report lookup per store."""

    def test_reports_for_store(self, purchases, ids):
        user_service.generate_daily_sales_reports(REPORT_DATE)
        user_service.generate_daily_sales_reports(date(2024, 5, 2))

        reports = user_service.get_daily_sales_reports(ids["airport"])

        assert [r["reportDate"] for r in reports] == ["2024-05-01", "2024-05-02"]
        assert [r["totalSales"] for r in reports] == [pytest.approx(12.0), pytest.approx(12.0)]
        assert all(r["storeId"] == ids["airport"] for r in reports)

    def test_cached_reports_are_refreshed_after_generation(self, purchases, ids):
        assert user_service.get_daily_sales_reports(ids["downtown"]) == []

        user_service.generate_daily_sales_reports(REPORT_DATE)

        assert len(user_service.get_daily_sales_reports(ids["downtown"])) == 1

    def test_unknown_store_fails(self, app_ctx):
        with pytest.raises(ResourceNotFoundException, match="Store not found"):
            user_service.get_daily_sales_reports(9999)
