"""Command line interface for isapi-deploy"""
