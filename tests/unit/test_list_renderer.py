"""Unit tests for the saved rates list renderer."""

from src.core.list_renderer import ListRenderer, RatesListView, loading_html
from src.models.schema import SeaFreightRate, TerminalRate
from tests.test_fixtures import create_example_rates


class TestListRenderer:
    """Test ListRenderer.render."""

    def test_empty_state(self, repository):
        view = ListRenderer(repository).render("all")

        assert view.state == "empty"
        assert view.rows == []
        assert "No saved rates yet" in view.to_html()
        assert "rates-table" not in view.to_html()

    def test_rows_and_counts(self, repository):
        for rate in create_example_rates():
            repository.save(rate)
        repository.save(TerminalRate(origin_port="TRIZM", price=180))

        view = ListRenderer(repository).render("all")

        assert view.state == "rates"
        assert view.rate_filter == "all"
        assert len(view.rows) == 6
        assert view.counts["terminal"] == 2
        assert view.counts["sea"] == 1
        assert view.rows[0].route == "TRIZM"
        assert view.rows[0].label == "THC"

    def test_row_view_fields(self, repository):
        repository.save(SeaFreightRate(
            origin_port="TRAMR",
            origin_port_name="Ambarli",
            destination_port="USNYC",
            destination_port_name="New York",
            incoterm="CIF",
            price=1200,
        ))

        row = ListRenderer(repository).render("sea").rows[0]
        assert row.icon == "🚢"
        assert row.label == "SEA"
        assert row.route == "Ambarli → New York"
        assert row.container == "40HC"
        assert row.incoterm == "CIF"
        assert row.price == "$1,200"

    def test_missing_cells_show_dash(self, repository):
        repository.save(TerminalRate(origin_port="TRMER"))
        row = ListRenderer(repository).render("terminal").rows[0]
        assert row.container == "-"
        assert row.incoterm == "-"

    def test_filter_is_recorded(self, repository):
        for rate in create_example_rates():
            repository.save(rate)
        view = ListRenderer(repository).render("customs")
        assert view.rate_filter == "customs"
        assert [row.rate_type for row in view.rows] == ["customs"]

    def test_error_state(self, backend, repository):
        backend.fail_with = "connection refused"
        view = ListRenderer(repository).render("all")

        assert view.state == "error"
        assert view.error == "connection refused"
        assert "Error loading rates: connection refused" in view.to_html()

    def test_unknown_filter_error_state(self, backend, repository):
        view = ListRenderer(repository).render("air")

        assert view.state == "error"
        assert view.rate_filter == "air"
        assert "Error loading rates: Unknown rate filter: air" in view.to_html()
        assert backend.calls == []

    def test_unauthenticated_error_state(self, backend, repository):
        backend.user_id = None
        view = ListRenderer(repository).render("all")
        assert view.state == "error"
        assert "not authenticated" in view.error


class TestHtml:
    """Test list markup."""

    def test_values_are_escaped(self, repository):
        repository.save(TerminalRate(origin_port="X", origin_port_name="<script>alert(1)</script>"))
        html = ListRenderer(repository).render("all").to_html()
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_row_markup(self, repository):
        stored = repository.save(TerminalRate(origin_port="TRMER", origin_port_name="Mersin", price=210))
        html = ListRenderer(repository).render("all").to_html()
        assert f'data-id="{stored.id}"' in html
        assert 'rate-type-badge terminal' in html
        assert "$210" in html

    def test_loading_placeholder(self):
        assert "Loading rates..." in loading_html()

    def test_default_counts(self):
        view = RatesListView(state="empty")
        assert sum(view.counts.values()) == 0
        assert len(view.counts) == 5
