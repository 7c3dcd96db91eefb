"""Fixed texts shared by the synthesizers."""

# Shown in any column with no applicable value (automation uses "").
# ExportConfig.placeholder overrides it per run.
PLACEHOLDER = "N/A"
