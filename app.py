"""Gradio UI for the Freight Rates Manager."""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import gradio as gr

project_dir = Path(__file__).parent
sys.path.insert(0, str(project_dir))

from src.config.env_loader import load_environment_variables

load_environment_variables(project_dir)

from src.core.backend import SupabaseBackend
from src.core.errors import AuthError
from src.core.list_renderer import RatesListView
from src.core.rates_service import FreightRatesService, Notification
from src.core.repository import RateRepository
from src.core.tab_controller import (
    POPULATE_CITIES,
    POPULATE_COUNTRIES,
    POPULATE_PORTS,
    SET_DEFAULT_DATES,
    REFRESH_RATES,
    RateTab,
    TabController,
)
from src.models import catalog
from src.models.schema import ALL_RATES, IncludedService, RateType
from src.models.utils import get_type_icon, get_type_label
from src.config.settings import get_settings
from src.config.messages import ERROR_SIGN_IN_FAILED, SUCCESS_SIGNED_IN
from src.config.logging_config import get_logger

logger = get_logger(__name__)

CUSTOM_CSS = """
.rates-table { display: flex; flex-direction: column; gap: 8px; }
.rate-row {
    display: flex; align-items: center; gap: 16px; padding: 12px 16px;
    background: white; border-radius: 8px; box-shadow: 0 1px 3px rgba(0,0,0,0.1);
}
.rate-type-badge {
    font-size: 11px; font-weight: 600; padding: 4px 8px;
    border-radius: 4px; min-width: 60px; text-align: center;
}
.rate-type-badge.sea { background: #dbeafe; color: #1e40af; }
.rate-type-badge.pre_carriage { background: #fef3c7; color: #92400e; }
.rate-type-badge.on_carriage { background: #dcfce7; color: #166534; }
.rate-type-badge.terminal { background: #f3e8ff; color: #6b21a8; }
.rate-type-badge.customs { background: #fee2e2; color: #991b1b; }
.rate-route { flex: 2; font-weight: 500; }
.rate-container, .rate-incoterm { flex: 1; color: #64748b; font-size: 13px; }
.rate-price { flex: 1; font-weight: 600; color: #059669; }
.rate-id code { font-size: 11px; color: #94a3b8; }
.loading-rates, .error-rates, .empty-rates { text-align: center; padding: 40px; color: #64748b; }
.empty-rates .empty-icon { font-size: 48px; display: block; margin-bottom: 16px; }
"""

FILTER_CHOICES = [("All", ALL_RATES)] + [
    (f"{get_type_icon(t.value)} {get_type_label(t.value)}", t.value) for t in RateType
]

SERVICE_CHOICES = [
    ("Origin haulage", IncludedService.ORIGIN_HAULAGE.value),
    ("Destination haulage", IncludedService.DEST_HAULAGE.value),
    ("THC", IncludedService.THC.value),
    ("Customs", IncludedService.CUSTOMS.value),
    ("Documentation", IncludedService.DOCUMENTATION.value),
]


def notify(notification: Notification) -> None:
    """Show a notification as a Gradio toast."""
    if notification.ok:
        gr.Info(notification.message)
    else:
        gr.Warning(notification.message)


def counts_markdown(view: Optional[RatesListView]) -> str:
    """One-line summary of rate counts per category."""
    if view is None:
        return ""
    return " · ".join(
        f"{get_type_icon(rate_type)} {get_type_label(rate_type)}: **{count}**"
        for rate_type, count in view.counts.items()
    )


def default_date() -> str:
    return catalog.default_valid_until().isoformat()


def price_label(text: str, currency: str) -> str:
    return f"{text} ({currency})"


class RateForm:
    """Components of one rate entry tab, in submission order.

    Attributes:
        rate_type: Category the form submits
        fields: Form field name -> Gradio component
        resets: Field name -> callable returning the value after a successful save
    """

    def __init__(self, rate_type: RateType, fields: Dict[str, Any], resets: Dict[str, Callable[[], Any]]):
        self.rate_type = rate_type
        self.fields = fields
        self.resets = resets

    @property
    def names(self) -> List[str]:
        return list(self.fields)

    @property
    def components(self) -> List[Any]:
        return list(self.fields.values())

    def reset_values(self) -> List[Any]:
        return [self.resets.get(name, lambda: None)() for name in self.names]


def _sea_form(currency: str) -> RateForm:
    with gr.Row():
        origin = gr.Dropdown(catalog.port_choices(), label="Origin port")
        destination = gr.Dropdown(catalog.port_choices(), label="Destination port")
    with gr.Row():
        shipment = gr.Radio(catalog.SHIPMENT_TYPES, value="fcl", label="Shipment type")
        container = gr.Dropdown(catalog.CONTAINER_TYPES, value="40HC", label="Container type")
        incoterm = gr.Dropdown(catalog.INCOTERMS, value="FOB", label="Incoterm")
    with gr.Row():
        price = gr.Number(label=price_label("Base rate", currency), minimum=0)
        transit = gr.Number(label="Transit days", precision=0, minimum=0)
        valid_until = gr.Textbox(value=default_date(), label="Valid until (YYYY-MM-DD)")
    services = gr.CheckboxGroup(SERVICE_CHOICES, label="Included services")
    notes = gr.Textbox(label="Notes", lines=2)
    return RateForm(
        RateType.SEA,
        {
            "origin_port": origin,
            "destination_port": destination,
            "shipment_type": shipment,
            "container_type": container,
            "incoterm": incoterm,
            "price": price,
            "transit_days": transit,
            "valid_until": valid_until,
            "included_services": services,
            "notes": notes,
        },
        {
            "shipment_type": lambda: "fcl",
            "container_type": lambda: "40HC",
            "incoterm": lambda: "FOB",
            "valid_until": default_date,
            "included_services": list,
        },
    )


def _pre_carriage_form(currency: str) -> RateForm:
    with gr.Row():
        origin_city = gr.Dropdown(catalog.TURKISH_CITIES, label="Origin city")
        destination = gr.Dropdown(catalog.port_choices(), label="Port of loading")
        container = gr.Dropdown(catalog.CONTAINER_TYPES, label="Container / truck type")
    with gr.Row():
        price = gr.Number(label=price_label("Rate", currency), minimum=0)
        transit = gr.Number(value=1, label="Transit days", precision=0, minimum=0)
        valid_until = gr.Textbox(value=default_date(), label="Valid until (YYYY-MM-DD)")
    return RateForm(
        RateType.PRE_CARRIAGE,
        {
            "origin_city": origin_city,
            "destination_port": destination,
            "container_type": container,
            "price": price,
            "transit_days": transit,
            "valid_until": valid_until,
        },
        {"transit_days": lambda: 1, "valid_until": default_date},
    )


def _on_carriage_form(currency: str) -> RateForm:
    with gr.Row():
        country = gr.Dropdown(catalog.country_choices(), label="Country")
        origin = gr.Dropdown(catalog.port_choices(), label="Port of discharge")
        destination_city = gr.Textbox(label="Destination city")
    with gr.Row():
        container = gr.Dropdown(catalog.CONTAINER_TYPES, label="Container / truck type")
        price = gr.Number(label="Rate", minimum=0)
        currency_field = gr.Dropdown(catalog.CURRENCIES, value=currency, label="Currency")
    with gr.Row():
        transit = gr.Number(value=1, label="Transit days", precision=0, minimum=0)
        valid_until = gr.Textbox(value=default_date(), label="Valid until (YYYY-MM-DD)")
    return RateForm(
        RateType.ON_CARRIAGE,
        {
            "country_code": country,
            "origin_port": origin,
            "destination_city": destination_city,
            "container_type": container,
            "price": price,
            "currency": currency_field,
            "transit_days": transit,
            "valid_until": valid_until,
        },
        {"currency": lambda: currency, "transit_days": lambda: 1, "valid_until": default_date},
    )


def _terminal_form(currency: str) -> RateForm:
    with gr.Row():
        port = gr.Dropdown(catalog.port_choices(), label="Port")
        side = gr.Radio(catalog.THC_SIDES, value="origin", label="THC side")
        container = gr.Dropdown(catalog.CONTAINER_TYPES, label="Container type")
    with gr.Row():
        price = gr.Number(label=price_label("THC", currency), minimum=0)
        valid_until = gr.Textbox(value=default_date(), label="Valid until (YYYY-MM-DD)")
    return RateForm(
        RateType.TERMINAL,
        {
            "port": port,
            "thc_side": side,
            "container_type": container,
            "price": price,
            "valid_until": valid_until,
        },
        {"thc_side": lambda: "origin", "valid_until": default_date},
    )


def _customs_form(currency: str) -> RateForm:
    # Clearance fees are quoted in the currency picked on the form, EUR by default
    with gr.Row():
        country = gr.Dropdown(catalog.country_choices(), label="Country")
        port = gr.Dropdown(catalog.port_choices(), label="Port")
        partner = gr.Textbox(label="Partner name")
    with gr.Row():
        container = gr.Dropdown(catalog.CONTAINER_TYPES, label="Container type")
        fee = gr.Number(label="Clearance fee", minimum=0)
        currency_field = gr.Dropdown(catalog.CURRENCIES, value="EUR", label="Currency")
        valid_until = gr.Textbox(value=default_date(), label="Valid until (YYYY-MM-DD)")
    return RateForm(
        RateType.CUSTOMS,
        {
            "country_code": country,
            "port": port,
            "partner_name": partner,
            "container_type": container,
            "clearance_fee": fee,
            "currency": currency_field,
            "valid_until": valid_until,
        },
        {"currency": lambda: "EUR", "valid_until": default_date},
    )


# Builders receive the currency the collector stores for fixed-currency forms
FORM_BUILDERS = {
    RateTab.SEA_FREIGHT: ("🚢 Sea Freight", _sea_form),
    RateTab.PRE_CARRIAGE: ("🚛 Pre-Carriage", _pre_carriage_form),
    RateTab.ON_CARRIAGE: ("🚚 On-Carriage", _on_carriage_form),
    RateTab.TERMINAL: ("🏗️ Terminal / THC", _terminal_form),
    RateTab.FOREIGN_CUSTOMS: ("📋 Foreign Customs", _customs_form),
}


def create_demo(service: FreightRatesService, backend: Optional[SupabaseBackend] = None) -> gr.Blocks:
    """Create the Gradio Blocks app for the freight rates section.

    Args:
        service: Service performing the rate operations
        backend: Supabase backend, used for the sign-in panel when given

    Returns:
        gr.Blocks: Configured interface
    """
    controller = TabController(service.tab_hooks({
        POPULATE_PORTS: catalog.port_choices,
        POPULATE_CITIES: lambda: catalog.TURKISH_CITIES,
        POPULATE_COUNTRIES: catalog.country_choices,
        SET_DEFAULT_DATES: default_date,
    }))

    with gr.Blocks(css=CUSTOM_CSS, theme=gr.themes.Soft(), title="Freight Rates") as demo:
        gr.Markdown("<h1 style='text-align: center; margin: 20px 0;'>Freight Rates Manager</h1>")

        if backend is not None:
            with gr.Accordion("Sign in", open=False):
                with gr.Row():
                    email = gr.Textbox(label="Email")
                    password = gr.Textbox(label="Password", type="password")
                    sign_in_button = gr.Button("Sign in")

        forms: Dict[RateTab, RateForm] = {}
        save_buttons: Dict[RateTab, gr.Button] = {}
        tabs: Dict[RateTab, gr.Tab] = {}

        with gr.Tabs(selected=controller.active.value):
            for tab_id, (label, builder) in FORM_BUILDERS.items():
                with gr.Tab(label, id=tab_id.value) as tab:
                    forms[tab_id] = builder(service.collector.default_currency)
                    save_buttons[tab_id] = gr.Button("Save rate", variant="primary")
                tabs[tab_id] = tab

            with gr.Tab("📊 My Rates", id=RateTab.MY_RATES.value) as my_rates_tab:
                rate_filter = gr.Radio(FILTER_CHOICES, value=ALL_RATES, label="Filter")
                counts = gr.Markdown()
                rates_list = gr.HTML()
                with gr.Row():
                    delete_id = gr.Textbox(label="Rate id to delete")
                    delete_confirm = gr.Checkbox(label="Yes, delete this rate")
                    delete_button = gr.Button("Delete", variant="stop")
            tabs[RateTab.MY_RATES] = my_rates_tab

        def show_list(view: RatesListView):
            return view.to_html(), counts_markdown(view)

        def make_save_handler(form: RateForm):
            def handler(current_filter: str, *values):
                notification, stored = service.save_rate(form.rate_type, dict(zip(form.names, values)))
                notify(notification)
                resets = form.reset_values() if stored is not None else [gr.update() for _ in values]
                return (*show_list(service.render_saved_rates(current_filter)), *resets)
            return handler

        for tab_id, form in forms.items():
            save_buttons[tab_id].click(
                make_save_handler(form),
                inputs=[rate_filter, *form.components],
                outputs=[rates_list, counts, *form.components],
            )

        def make_select_handler(tab_id: RateTab):
            def handler(current_filter: str, *current_date):
                switch = controller.switch(tab_id, current_filter)
                view = switch.outputs.get(REFRESH_RATES)
                listing = show_list(view) if view is not None else (gr.update(), gr.update())
                if not current_date:
                    return listing
                # Only prefill an empty date; keep what the user typed
                date_value = current_date[0] or switch.outputs.get(SET_DEFAULT_DATES, gr.update())
                return (*listing, date_value)
            return handler

        for tab_id, tab in tabs.items():
            date_box: List[Any] = [forms[tab_id].fields["valid_until"]] if tab_id in forms else []
            tab.select(
                make_select_handler(tab_id),
                inputs=[rate_filter, *date_box],
                outputs=[rates_list, counts, *date_box],
            )

        rate_filter.change(
            lambda f: show_list(service.filter_saved_rates(f)),
            inputs=[rate_filter],
            outputs=[rates_list, counts],
        )

        def delete(rate_id: str, confirmed: bool, current_filter: str):
            notify(service.delete_rate(rate_id, confirmed))
            return (*show_list(service.render_saved_rates(current_filter)), "", False)

        delete_button.click(
            delete,
            inputs=[delete_id, delete_confirm, rate_filter],
            outputs=[rates_list, counts, delete_id, delete_confirm],
        )

        def initialize():
            notification, view = service.initialize()
            if not notification.ok:
                notify(notification)
            if view is None:
                return "", ""
            return show_list(view)

        demo.load(initialize, outputs=[rates_list, counts])

        if backend is not None:
            def sign_in(user_email: str, user_password: str):
                try:
                    backend.sign_in(user_email, user_password)
                except AuthError as e:
                    gr.Warning(ERROR_SIGN_IN_FAILED.format(error=e))
                    return (gr.update(), gr.update(), "")
                gr.Info(SUCCESS_SIGNED_IN.format(email=user_email))
                return (*show_list(service.render_saved_rates(ALL_RATES)), "")

            sign_in_button.click(sign_in, inputs=[email, password], outputs=[rates_list, counts, password])

    return demo


def build_service(backend: SupabaseBackend) -> FreightRatesService:
    """Service over a repository bound to ``backend``."""
    return FreightRatesService(RateRepository(backend))


def main():
    """Main entry point for the Freight Rates Manager."""
    settings = get_settings()
    print("=" * 60)
    print("Freight Rates Manager")
    print("=" * 60)

    try:
        backend = SupabaseBackend.from_settings(settings)
    except AuthError as e:
        logger.error(f"Cannot start: {e}")
        print(f"Error: {e}")
        print("Set SUPABASE_URL and SUPABASE_ANON_KEY in your environment or .env file.")
        return 1

    print(f"Starting web interface on http://localhost:{settings.server_port}")
    print("Press Ctrl+C to stop the server.")
    print("=" * 60)

    demo = create_demo(build_service(backend), backend)
    demo.launch(
        server_name=settings.server_host,
        server_port=settings.server_port,
        share=False
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
