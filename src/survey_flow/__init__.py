"""survey_flow — servidor HTTP do questionário de 9 páginas."""
