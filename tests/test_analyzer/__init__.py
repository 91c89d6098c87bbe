"""Statistics, event log and trajectory plot tests"""
