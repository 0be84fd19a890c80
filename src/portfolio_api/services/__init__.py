"""Services"""
