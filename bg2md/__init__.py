"""Convert BibleGateway passage pages into Markdown."""
