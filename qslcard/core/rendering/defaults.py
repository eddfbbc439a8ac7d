"""
Built-in card template, field catalogue and preview data.
"""

from typing import Dict, List

# Token name -> human readable label, in the order editors should list them
AVAILABLE_FIELDS: List[Dict[str, str]] = [
    {"key": "contactCall", "label": "Contact callsign"},
    {"key": "contactName", "label": "Contact name"},
    {"key": "myCall", "label": "My callsign"},
    {"key": "myName", "label": "My name"},
    {"key": "frequency", "label": "Frequency"},
    {"key": "mode", "label": "Mode"},
    {"key": "date", "label": "Date"},
    {"key": "time", "label": "Time"},
    {"key": "rstSent", "label": "RST sent"},
    {"key": "rstReceived", "label": "RST received"},
    {"key": "band", "label": "Band"},
    {"key": "power", "label": "Power"},
    {"key": "antenna", "label": "Antenna"},
    {"key": "qth", "label": "QTH"},
    {"key": "locator", "label": "Locator"},
    {"key": "notes", "label": "Notes"},
]

FIELD_KEYS = [field["key"] for field in AVAILABLE_FIELDS]

SAMPLE_CARD_DATA: Dict[str, str] = {
    "contactCall": "BH1ABC",
    "contactName": "Zhang San",
    "myCall": "BH9XYZ",
    "myName": "Li Si",
    "frequency": "14.205",
    "mode": "SSB",
    "date": "2024-01-15",
    "time": "13:30",
    "rstSent": "59",
    "rstReceived": "58",
    "band": "20m",
    "power": "100W",
    "antenna": "Yagi",
    "qth": "Beijing",
    "locator": "JO62",
    "notes": "Thanks for the pleasant QSO",
}

DEFAULT_TEMPLATE_NAME = "Classic QSL"
DEFAULT_TEMPLATE_DESCRIPTION = "Default 5.5 x 3.5 inch card"

DEFAULT_HTML = """
<div class="qsl-card">
  <div class="card-header">
    <h1>QSL CARD</h1>
    <div class="my-info">
      <div class="call">{{myCall}}</div>
      <div class="name">{{myName}}</div>
    </div>
  </div>

  <div class="card-body">
    <div class="contact-info">
      <h2>Confirming QSO with</h2>
      <div class="field-group">
        <label>Callsign:</label>
        <span class="value">{{contactCall}}</span>
      </div>
      <div class="field-group">
        <label>Name:</label>
        <span class="value">{{contactName}}</span>
      </div>
      <div class="field-group">
        <label>Frequency:</label>
        <span class="value">{{frequency}} MHz</span>
      </div>
      <div class="field-group">
        <label>Mode:</label>
        <span class="value">{{mode}}</span>
      </div>
      <div class="field-group">
        <label>Date/Time:</label>
        <span class="value">{{date}} {{time}} UTC</span>
      </div>
      <div class="field-group">
        <label>RST:</label>
        <span class="value">sent {{rstSent}} / rcvd {{rstReceived}}</span>
      </div>
    </div>

    <div class="additional-info">
      <div class="field-group">
        <label>Power:</label>
        <span class="value">{{power}}</span>
      </div>
      <div class="field-group">
        <label>Antenna:</label>
        <span class="value">{{antenna}}</span>
      </div>
      <div class="field-group">
        <label>QTH:</label>
        <span class="value">{{qth}} {{locator}}</span>
      </div>
    </div>

    <div class="notes">
      <label>Notes:</label>
      <p>{{notes}}</p>
    </div>
  </div>

  <div class="card-footer">
    <span class="qsl-status">[ ] PSE QSL &nbsp; [ ] TNX QSL</span>
  </div>
</div>
""".strip()

DEFAULT_CSS = """
.qsl-card {
  width: 5.5in;
  height: 3.5in;
  border: 2px solid #333;
  font-family: Arial, sans-serif;
  background: #f5f7fa;
  padding: 16px;
  box-sizing: border-box;
}

.card-header {
  border-bottom: 2px solid #333;
  padding-bottom: 8px;
  margin-bottom: 12px;
}

.card-header h1 {
  margin: 0;
  font-size: 24px;
  font-weight: bold;
  color: #333;
}

.my-info {
  text-align: right;
}

.my-info .call {
  font-size: 20px;
  font-weight: bold;
  color: #d32f2f;
}

.my-info .name {
  font-size: 14px;
  color: #666;
}

.contact-info h2 {
  margin: 0 0 8px 0;
  font-size: 16px;
  color: #333;
  border-bottom: 1px solid #666;
}

.field-group {
  margin-bottom: 4px;
  font-size: 12px;
}

.field-group label {
  font-weight: bold;
  color: #555;
}

.field-group .value {
  color: #333;
}

.notes {
  font-size: 11px;
  color: #444;
}

.card-footer {
  border-top: 1px solid #666;
  padding-top: 6px;
  font-size: 11px;
}
""".strip()
