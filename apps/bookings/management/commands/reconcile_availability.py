from django.core.management.base import BaseCommand, CommandError

from apps.bookings.services import reconcile_vehicle_ledger
from apps.vehicles.models import Vehicle


class Command(BaseCommand):
    help = "Rebuild booking-owned availability ledger entries from the booking table"

    def add_arguments(self, parser):
        parser.add_argument("--vehicle", type=int, help="Only reconcile this vehicle id")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report drift without changing anything",
        )

    def handle(self, *args, **options):
        vehicles = Vehicle.objects.order_by("pk")
        if options.get("vehicle"):
            vehicles = vehicles.filter(pk=options["vehicle"])
            if not vehicles.exists():
                raise CommandError(f"Vehicle {options['vehicle']} not found")

        dry_run = options["dry_run"]
        drifted = 0
        for vehicle in vehicles:
            report = reconcile_vehicle_ledger(vehicle, dry_run=dry_run)
            if not report.changed:
                continue
            drifted += 1
            self.stdout.write(
                f"Vehicle {vehicle.pk}: removed={report.removed} "
                f"realigned={report.realigned} created={report.created}"
            )

        verb = "would change" if dry_run else "reconciled"
        self.stdout.write(self.style.SUCCESS(f"{drifted} vehicle ledger(s) {verb}"))
