"""Terminal styles and tables that fall back to plain text."""