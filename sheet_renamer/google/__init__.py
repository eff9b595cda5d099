"""Google Sheets / Drive implementations of the host interfaces."""
