import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_datetime

from announcements.models import Announcement


class Command(BaseCommand):
    help = "Seed Announcement rows from a JSON file ([{text, images?, date?}, ...])."

    def add_arguments(self, parser):
        parser.add_argument("json_path", type=str, help="Path to announcements JSON")

    def handle(self, *args, **opts):
        path = Path(opts["json_path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")
        data = json.loads(path.read_text(encoding="utf-8"))
        items = data if isinstance(data, list) else data.get("results", [])

        created = skipped = 0
        for x in items:
            text = (x.get("text") or "").strip()
            if not text:
                skipped += 1
                continue
            defaults = {"images": [u for u in (x.get("images") or []) if u] or None}
            date = parse_datetime(x["date"]) if x.get("date") else None
            if date is not None:
                defaults["date"] = date
            _, made = Announcement.objects.get_or_create(text=text, defaults=defaults)
            created += 1 if made else 0

        if skipped:
            self.stdout.write(self.style.WARNING(f"Skipped {skipped} item(s) without text."))
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} announcement(s)."))
