"""On The Docket - content manager and publishing hub"""
