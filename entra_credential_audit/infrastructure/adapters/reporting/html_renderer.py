"""HTML rendering of expiring credential reports."""

from __future__ import annotations

from datetime import UTC, datetime
from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ....domain.value_objects import ExpiringCredentialRecord, NotificationGroup

_STYLE = """
body { font-family: Arial, sans-serif; margin: 20px; }
.header { background-color: #0078D4; color: white; padding: 15px; border-radius: 5px; }
.header.owner { background-color: #dc3545; }
.summary { background-color: #f8f9fa; padding: 15px; margin: 15px 0; border-radius: 5px; }
table { border-collapse: collapse; width: 100%; margin: 15px 0; }
th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
th { background-color: #4CAF50; color: white; }
th.sortable { cursor: pointer; }
tr:nth-child(even) { background-color: #f2f2f2; }
a { color: #0066cc; text-decoration: none; }
a:hover { text-decoration: underline; }
.notice { border-left: 4px solid #ffc107; padding: 10px 15px; background-color: #fff8e1; }
.footer { margin-top: 20px; font-size: 12px; color: #6c757d; }
"""

# Click a header to sort by that column. Cells with a data-sort key sort by it;
# keys compare numerically only when both are numbers, everything else as text.
_SORT_SCRIPT = """
function sortKey(cell) {
  var key = cell.getAttribute("data-sort");
  if (key === null) {
    return { numeric: false, value: 0, text: cell.textContent };
  }
  var numeric = /^-?[0-9]+([.][0-9]+)?$/.test(key);
  return { numeric: numeric, value: numeric ? parseFloat(key) : 0, text: key };
}
document.querySelectorAll("table.sortable").forEach(function (table) {
  table.querySelectorAll("th").forEach(function (th, index) {
    th.classList.add("sortable");
    th.addEventListener("click", function () {
      var body = table.tBodies[0];
      var rows = Array.prototype.slice.call(body.rows);
      var ascending = th.getAttribute("data-order") !== "asc";
      rows.sort(function (a, b) {
        var x = sortKey(a.cells[index]), y = sortKey(b.cells[index]);
        var cmp = (x.numeric && y.numeric) ? x.value - y.value : x.text.localeCompare(y.text);
        return ascending ? cmp : -cmp;
      });
      th.setAttribute("data-order", ascending ? "asc" : "desc");
      rows.forEach(function (row) { body.appendChild(row); });
    });
  });
});
"""

_FOOTER = "Entra ID App Credential Audit"


class HtmlReportRenderer:
    """
    Render expiring credential records as self-contained HTML documents.

    Output depends only on the records and the generation timestamp, so the
    same input always yields the same bytes.
    """

    def render_admin_report(
        self, records: Sequence[ExpiringCredentialRecord], generated_at: datetime
    ) -> str:
        """Render the administrator report with portal links and owner column."""
        header = (
            "<tr><th>App Name</th><th>App ID</th><th>Credential Name</th><th>Type</th>"
            "<th>Expires In</th><th>Expiration Date</th><th>NotifyEmail</th></tr>"
        )
        rows = "".join(self._admin_row(record) for record in records)
        if not records:
            rows = '<tr><td colspan="7">No credentials are expiring.</td></tr>\n'

        body = f"""<div class="header"><h1>Entra ID App Credentials Expiration Report</h1></div>
<div class="summary">
<p>Generated: {self._format_timestamp(generated_at)}</p>
<p>Expiring credentials: {len(records)} | Applications: {len({r.app_id for r in records})}</p>
</div>
<table class="sortable">
<thead>{header}</thead>
<tbody>
{rows}</tbody>
</table>"""
        return self._document("Entra ID App Credentials Expiration Report", body, script=_SORT_SCRIPT)

    def render_owner_report(self, group: NotificationGroup, generated_at: datetime) -> str:
        """Render the simplified owner alert for one recipient."""
        header = (
            "<tr><th>App Name</th><th>App ID</th><th>Credential Name</th><th>Type</th>"
            "<th>Expires In</th><th>Expiration Date</th></tr>"
        )
        rows = "".join(self._owner_row(record) for record in group.records)

        body = f"""<div class="header owner"><h1>Alert: App Credentials Expiring Soon</h1></div>
<div class="summary">
<p>Generated: {self._format_timestamp(generated_at)}</p>
<p>The following credentials of applications you own are about to expire.</p>
</div>
<table>
<thead>{header}</thead>
<tbody>
{rows}</tbody>
</table>
<div class="notice"><p>Please contact your administrator to renew these credentials before they expire.</p></div>"""
        return self._document("Alert: App Credentials Expiring Soon", body)

    def _admin_row(self, record: ExpiringCredentialRecord) -> str:
        link = f'<a href="{escape(record.portal_url)}" target="_blank">{escape(record.credential_name)}</a>'
        return (
            f"<tr><td>{escape(record.app_name)}</td><td>{escape(record.app_id)}</td>"
            f"<td>{link}</td><td>{escape(str(record.kind))}</td>"
            f'<td data-sort="{record.days_remaining}">{record.days_remaining} days</td>'
            f'<td data-sort="{self._sort_timestamp(record.expires_at)}">'
            f"{self._format_date(record.expires_at)}</td>"
            f"<td>{escape(record.notify_email)}</td></tr>\n"
        )

    def _owner_row(self, record: ExpiringCredentialRecord) -> str:
        return (
            f"<tr><td>{escape(record.app_name)}</td><td>{escape(record.app_id)}</td>"
            f"<td>{escape(record.credential_name)}</td><td>{escape(str(record.kind))}</td>"
            f"<td>{record.days_remaining} days</td>"
            f"<td>{self._format_date(record.expires_at)}</td></tr>\n"
        )

    @staticmethod
    def _format_timestamp(value: datetime) -> str:
        aware = value if value.tzinfo else value.replace(tzinfo=UTC)
        return aware.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")

    @staticmethod
    def _sort_timestamp(value: datetime) -> str:
        aware = value if value.tzinfo else value.replace(tzinfo=UTC)
        return aware.astimezone(UTC).isoformat()

    @staticmethod
    def _format_date(value: datetime) -> str:
        aware = value if value.tzinfo else value.replace(tzinfo=UTC)
        return aware.astimezone(UTC).date().isoformat()

    @staticmethod
    def _document(title: str, body: str, *, script: str = "") -> str:
        script_tag = f"<script>{script}</script>\n" if script else ""
        return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{escape(title)}</title>
<style>{_STYLE}</style>
</head>
<body>
{body}
<div class="footer"><p>{_FOOTER}</p></div>
{script_tag}</body>
</html>"""
