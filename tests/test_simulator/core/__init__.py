"""Tests for requests, the request queue, the arrival source and elevators"""
