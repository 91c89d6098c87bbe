"""Dispatcher tests"""
