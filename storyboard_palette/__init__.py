"""storyboard-palette — replace inline colours in storyboards/xibs with named palette colours."""
