"""Core — pure domain rules, types and errors. No IO, no framework imports."""
