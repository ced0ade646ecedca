"""End-to-end verification suite for the DemoQA Books store page."""
