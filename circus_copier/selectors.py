"""Centralized CSS selectors for the Circus candidate page.

All source-page DOM selectors live here so they can be updated in one place
when Circus changes its frontend. ATS-side selectors are data, not code: they
live in the field mappings (see mappings.py) and can be overridden from YAML.

Run `main.py --check-selectors URL` to verify mapping selectors against a
live ATS form.
"""

# -- Page detection ------------------------------------------------------------

# Substring of every Circus candidate (selection) page URL
CIRCUS_URL_MARKER = "circus-job.com/selections/"

# -- Labeled rows --------------------------------------------------------------

# Each "label | value" row on the candidate detail panel (MUI grid)
LABEL_ROW = ".MuiGrid-container"
LABEL_CELL = ".MuiGrid-grid-xs-3 p"
VALUE_CELL = ".MuiGrid-grid-xs-9"

# -- Free-text blocks ----------------------------------------------------------

# NOTE: emotion-generated class names; these break whenever Circus rebuilds.
RECOMMENDATION = ".MuiTypography-root.css-11u4g3d"
TRANSFER_REASON = ".MuiBox-root.css-35ezg3 p"

# -- ATS form controls ---------------------------------------------------------

# Radio inputs are located by name + value rather than by the mapping selector
RADIO_TEMPLATE = 'input[type="radio"][name="{name}"][value="{value}"]'
