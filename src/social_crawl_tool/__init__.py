"""Browser session management and DOM extraction for social-media crawling."""
