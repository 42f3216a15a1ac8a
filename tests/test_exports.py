import unittest
from datetime import date

from roi_services.exports.pdf import render_pdf
from roi_services.exports.reports import (
    breakdown_rows,
    executive_summary,
    format_currency,
    format_months,
    format_percentage,
    input_rows,
    report_filename,
    result_rows,
)

SCENARIO = {
    "id": "s_abc12345",
    "scenario_name": "Q4 Pilot",
    "monthly_invoice_volume": 2000,
    "num_ap_staff": 3,
    "avg_hours_per_invoice": 0.17,
    "hourly_wage": 30,
    "error_rate_manual": 0.5,
    "error_cost": 100,
    "time_horizon_months": 36,
    "one_time_implementation_cost": 50000,
    "results": {
        "monthly_savings": 34100.0,
        "cumulative_savings": 1227600.0,
        "net_savings": 1177600.0,
        "payback_months": 1.5,
        "roi_percentage": 2355.2,
        "labor_cost_manual": 30600.0,
        "auto_cost": 400.0,
        "error_savings": 800.0,
    },
}


class TestReports(unittest.TestCase):
    def test_format_currency(self):
        self.assertEqual(format_currency(1234.5), "$1,234.50")
        self.assertEqual(format_currency(-1309), "-$1,309.00")
        self.assertEqual(format_currency(0), "$0.00")

    def test_format_percentage(self):
        self.assertEqual(format_percentage(2355.2), "2355.20%")
        self.assertEqual(format_percentage("Infinite"), "Infinite")

    def test_format_months(self):
        self.assertEqual(format_months(1.5), "1.5 months")
        self.assertEqual(format_months(None), "n/a")

    def test_rows(self):
        inputs = dict(input_rows(SCENARIO))
        self.assertEqual(inputs["Monthly Invoice Volume"], "2,000 invoices")
        self.assertEqual(inputs["Implementation Cost"], "$50,000.00")
        results = dict(result_rows(SCENARIO))
        self.assertEqual(results["Total ROI"], "2355.20%")
        self.assertEqual(results["Payback Period"], "1.5 months")
        breakdown = dict(breakdown_rows(SCENARIO))
        self.assertEqual(breakdown["Cumulative Savings"], "$1,227,600.00 over 36 months")

    def test_summary(self):
        text = " ".join(executive_summary(SCENARIO))
        self.assertIn("$34,100.00 in monthly savings", text)
        self.assertIn("payback in 1.5 months", text)
        self.assertIn("$1,177,600.00", text)

    def test_report_filename(self):
        self.assertEqual(report_filename(SCENARIO), "ROI_Report_Q4_Pilot.pdf")
        self.assertEqual(report_filename({"scenario_name": 'a"b/c'}), "ROI_Report_a_b_c.pdf")


class TestPDF(unittest.TestCase):
    def test_render_pdf(self):
        body = render_pdf(SCENARIO, generated_on=date(2024, 1, 15))
        self.assertTrue(body.startswith(b"%PDF"))
        self.assertGreater(len(body), 1000)

    def test_render_pdf_infinite_roi_and_markup_in_name(self):
        s = {**SCENARIO, "scenario_name": "<R&D>", "one_time_implementation_cost": 0,
             "results": {**SCENARIO["results"], "roi_percentage": "Infinite", "payback_months": 0}}
        self.assertTrue(render_pdf(s).startswith(b"%PDF"))

    def test_render_pdf_without_finite_payback(self):
        s = {**SCENARIO, "results": {**SCENARIO["results"], "payback_months": None}}
        self.assertEqual(dict(result_rows(s))["Payback Period"], "n/a")
        self.assertIn("payback in n/a", " ".join(executive_summary(s)))
        self.assertTrue(render_pdf(s).startswith(b"%PDF"))


if __name__ == '__main__':
    unittest.main()
