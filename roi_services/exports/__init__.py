"""Report generation for saved scenarios.

- reports.py: number formatting and the labelled rows / summary text of a report
- pdf.py: A4 PDF rendering with reportlab
"""
