"""
Waveform coordinate ingestion: generate samples, store one row per axis value.
"""
