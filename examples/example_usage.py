"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; check-in and reporting logic lives in the services.
"""

from event_checkin.checkin.payload import encode_payload
from event_checkin.container import build_container
from event_checkin.main import load_settings
from event_checkin.reports.exporter import to_csv


def main():
    container = build_container(settings=load_settings())

    result = container.checkin_service.process(encode_payload("M-0004", 3))
    print(result.message)

    print(container.report_service.census())
    print(to_csv(container.report_service.engagement_rows()))


if __name__ == "__main__":
    main()
