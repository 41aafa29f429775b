"""
End-to-end tests for crawl log analysis.

Runs whole log blobs (and log files on disk) through the analysis and
checks the finished report, including cross-field invariants.
"""

import json

import pytest

from crawl_log_analyzer import analyze_logs
from crawl_log_analyzer.config import AnalyzerSettings
from crawl_log_analyzer.ingestion import read_log_files


class TestSingleLineScenarios:
    """Single-line behaviour of the whole pipeline."""

    def test_googlebot_with_params(self, make_line):
        """Googlebot request for a parameterized URL."""
        result = analyze_logs(make_line(path="/foo/bar?x=1"))
        detailed = result.detailed_analysis

        assert [bot.bot_name for bot in result.bots] == ["Googlebot"]
        top = detailed.step3.top_urls[0]
        assert top.url == "/foo/bar"
        assert top.has_params is True
        assert top.depth == 2
        assert detailed.step4.buckets["withParams"] == 1
        assert detailed.step5.buckets["status200"] == 1
        assert detailed.step7.distribution["2"] == 1

    def test_image_bot_404(self, image_bot_404_line):
        """Specific variant, notFound precedence and a global error entry."""
        result = analyze_logs(image_bot_404_line)
        detailed = result.detailed_analysis

        assert result.bots[0].bot_name == "Googlebot Image"
        assert detailed.step4.buckets["notFound"] == 1
        assert detailed.step4.buckets["canonical"] == 0
        assert detailed.step5.buckets["status404"] == 1
        assert len(result.errors) == 1
        error = result.errors[0]
        assert (error.bot_name, error.status_code) == ("Googlebot Image", 404)
        assert error.url == "/missing"
        assert result.bots[0].errors[0].status_code == 404

    def test_browser_line_ignored(self, browser_line):
        """Non-crawler lines only count as scanned lines."""
        result = analyze_logs(browser_line)
        detailed = result.detailed_analysis

        assert result.total_visits == 0
        assert result.bots == ()
        assert detailed.step1.total_lines == 1
        assert detailed.step2.unique_urls == 0
        assert detailed.step5.total_with_status == 0

    def test_permanent_redirect(self, make_line):
        """A 301 feeds the status and redirect steps."""
        detailed = analyze_logs(make_line(path="/old", status=301)).detailed_analysis

        assert detailed.step5.buckets["status301"] == 1
        assert detailed.step6.total_redirects == 1
        assert detailed.step6.redirect_types[301] == 1
        assert detailed.step6.redirect_rate == 100.0

    def test_distinct_urls_at_volume(self, make_line):
        """10,000 distinct URLs are each requested once."""
        text = "\n".join(make_line(path=f"/product/{i}/details") for i in range(10_000))

        step2 = analyze_logs(text).detailed_analysis.step2

        assert step2.unique_urls == 10_000
        assert step2.avg_requests_per_url == 1.0


class TestEmptyInput:
    """Tests for inputs without crawler activity."""

    @pytest.mark.parametrize("text", ["", "\n\n", "   \n\t\n"])
    def test_blank(self, text):
        """Blank input produces an all-zero report."""
        result = analyze_logs(text)

        assert result.total_visits == 0
        assert result.detailed_analysis.step1.total_lines == 0
        assert result.detailed_analysis.step1.identification_rate == 0.0
        assert result.detailed_analysis.step9.peak_hour is None

    def test_garbage_only(self):
        """Binary noise is scanned but never matched."""
        result = analyze_logs("\x00\x01\x02\n\xff\xfe\n<<<>>>")

        assert result.detailed_analysis.step1.total_lines == 3
        assert result.total_visits == 0


class TestSiteLog:
    """Tests for the realistic multi-format sample log."""

    def test_identification(self, site_result):
        """Lines, visits and verification."""
        step1 = site_result.detailed_analysis.step1

        assert step1.total_lines == 20
        assert step1.bot_lines == 17
        assert step1.identification_rate == 85.0
        assert step1.verified_visits == 13
        assert step1.unverified_visits == 4
        assert step1.verification_rate == 76.47

    def test_bots(self, site_result):
        """Bots sorted by visit count."""
        assert [(bot.bot_name, bot.count) for bot in site_result.bots] == [
            ("Googlebot", 11),
            ("Googlebot Image", 3),
            ("AdsBot Google", 2),
            ("Googlebot News", 1),
        ]
        assert site_result.unique_bots == 4

    def test_errors(self, site_result):
        """Errors sorted by status code."""
        assert [
            (error.status_code, error.bot_name, error.count, error.url)
            for error in site_result.errors
        ] == [
            (403, "Googlebot", 1, "/wp-admin/admin-ajax.php"),
            (404, "Googlebot Image", 2, "/missing.png"),
            (500, "AdsBot Google", 1, "/api/cart"),
        ]

    def test_volume_and_top_urls(self, site_result):
        """Unique URLs and the most crawled ones."""
        detailed = site_result.detailed_analysis

        assert detailed.step2.url_requests == 17
        assert detailed.step2.unique_urls == 14
        assert detailed.step2.avg_requests_per_url == 1.21
        assert detailed.step2.urls_with_params == 1
        assert [entry.url for entry in detailed.step3.top_urls[:4]] == [
            "/blog/crawl-budget-guide",
            "/products/shoes",
            "/missing.png",
            "/",
        ]

    def test_crawl_budget(self, site_result):
        """Every URL request lands in exactly one bucket."""
        step4 = site_result.detailed_analysis.step4

        assert step4.buckets == {
            "canonical": 10,
            "withParams": 2,
            "pagination": 1,
            "service": 2,
            "notFound": 2,
        }
        assert step4.total_classified == 17

    def test_status_and_redirects(self, site_result):
        """Status distribution and redirect summary."""
        detailed = site_result.detailed_analysis

        assert detailed.step5.buckets["status200"] == 11
        assert detailed.step5.buckets["status5xx"] == 1
        assert detailed.step5.total_with_status == 17
        assert detailed.step6.total_redirects == 2
        assert detailed.step6.redirect_types == {301: 1, 302: 1, 308: 0}
        assert detailed.step6.redirect_rate == 11.76

    def test_depth(self, site_result):
        """Depth distribution and weighted average."""
        step7 = site_result.detailed_analysis.step7

        assert step7.distribution == {"0": 1, "1": 6, "2": 8, "3": 1, "4": 0, "5+": 1}
        assert step7.average_depth == 1.82

    def test_response_time(self, site_result):
        """Only the application log line carries timing."""
        step8 = site_result.detailed_analysis.step8

        assert step8.timing_data_available is True
        assert step8.samples == 1
        assert step8.average_response_time == 120.0
        assert step8.max_response_time == 120.0

    def test_time_series(self, site_result):
        """Hourly and daily activity."""
        step9 = site_result.detailed_analysis.step9

        assert step9.hourly[8] == 2
        assert step9.hourly[9] == 5
        assert step9.hourly[13] == 5
        assert step9.hourly[23] == 1
        assert step9.peak_hour == 9
        assert step9.daily == {"2023-10-10": 8, "2023-10-11": 9}


class TestInvariants:
    """Cross-field consistency of a finished report."""

    def test_counts_consistent(self, site_result):
        """Sums across aggregates agree with the totals."""
        detailed = site_result.detailed_analysis
        total = site_result.total_visits

        assert sum(bot.count for bot in site_result.bots) == total
        assert detailed.step1.verified_visits + detailed.step1.unverified_visits == total
        assert detailed.step1.bot_lines <= detailed.step1.total_lines
        assert detailed.step4.total_classified == detailed.step2.url_requests
        assert sum(detailed.step7.distribution.values()) == detailed.step2.url_requests
        assert detailed.step5.total_with_status <= total
        assert sum(detailed.step9.hourly) <= total
        assert sum(detailed.step9.daily.values()) <= total
        assert detailed.step6.total_redirects == sum(detailed.step6.redirect_types.values())

    def test_sample_caps(self, make_line):
        """Sample lists never exceed their caps."""
        text = "\n".join(make_line(path="/same", status=404) for _ in range(50))
        result = analyze_logs(text)

        assert len(result.bots[0].sample_lines) == 3
        assert len(result.errors[0].sample_lines) == 3
        assert len(result.bots[0].errors[0].sample_lines) == 3
        assert len(result.detailed_analysis.step3.top_urls[0].sample_lines) == 2
        assert all(
            len(line) <= 200 for line in result.bots[0].sample_lines
        )

    def test_deterministic(self, site_log):
        """The same input always yields the same report."""
        first = json.dumps(analyze_logs(site_log).to_dict(), sort_keys=True)
        second = json.dumps(analyze_logs(site_log).to_dict(), sort_keys=True)

        assert first == second

    def test_percentages_bounded(self, site_result):
        """All percentages lie within 0..100."""
        detailed = site_result.detailed_analysis
        values = [
            detailed.step1.identification_rate,
            detailed.step1.verification_rate,
            detailed.step6.redirect_rate,
            *detailed.step4.percentages.values(),
            *detailed.step5.percentages.values(),
        ]

        assert all(0.0 <= value <= 100.0 for value in values)


class TestLogFiles:
    """Tests for analyses fed from files on disk."""

    def test_files_match_blob(self, log_dir, site_result):
        """Reading plain and gzip files gives the same report as the blob."""
        text = read_log_files([log_dir])

        assert analyze_logs(text).to_dict() == site_result.to_dict()


class TestSettingsInfluence:
    """Tests for settings changing report shape."""

    def test_referer_visits(self, make_line):
        """Referer-only lines count when enabled."""
        line = make_line(
            path="/landing",
            user_agent="Mozilla/5.0 Chrome/120.0",
            ip="198.51.100.7",
            referer="https://www.google.com/search?q=shoes",
        )

        assert analyze_logs(line).total_visits == 0
        result = analyze_logs(line, settings=AnalyzerSettings(detect_referer_visits=True))
        assert result.bots[0].bot_name == "Googlebot (via referer)"

    def test_top_urls_limit(self, site_log):
        """The number of top URLs follows the settings."""
        result = analyze_logs(site_log, settings=AnalyzerSettings(top_urls_limit=3))

        assert len(result.detailed_analysis.step3.top_urls) == 3
