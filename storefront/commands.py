import click
from flask.cli import with_appcontext

from storefront import user_service
from storefront.exceptions import BusinessException
from storefront.schemas import parse_report_date


@click.command('generate-reports')
@click.option('--date', 'report_date', default=None,
              help='Report date as YYYY-MM-DD. Defaults to yesterday (UTC).')
@with_appcontext
def generate_reports_command(report_date):
    """Create the daily sales report of every store not yet reported.

    Meant to be run by cron shortly after midnight.
    """
    try:
        report_date = parse_report_date(report_date)
    except BusinessException as e:
        raise click.BadParameter(e.message, param_hint="'--date'")
    reports = user_service.generate_daily_sales_reports(report_date)
    click.echo(f"Created {len(reports)} daily sales report(s).")
    for report in reports:
        click.echo(f"  {report['storeName']} {report['reportDate']}: {report['totalSales']:.2f}")
