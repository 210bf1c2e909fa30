"""Instruction prompt sent with every slide-deck generation request."""

# German, 10-12 slides, management audience. The slide range matches EXPECTED_SLIDE_RANGE in io.py.
GERMAN_SLIDE_DECK_PROMPT = """\
Erstelle ein Slide-Deck auf Deutsch basierend AUSSCHLIESSLICH auf dem bereitgestellten Transkript.

Vorgaben:
- Sprache: Deutsch
- Umfang: 10–12 Folien
- Zielgruppe: Management / Fachpublikum
- Stil: klar, prägnant, entscheidungsorientiert
- Jede Folie: Titel + 3–5 Bulletpoints, max. 12 Wörter pro Bulletpoint
- Zahlen, Eigennamen und Datumsangaben: exakt übernehmen
- Keine erfundenen Fakten, keine klinischen/realen Details hinzufügen, die nicht im Transkript stehen
- Wenn der Sprecher unklar ist: “Sprecher 1”, “Sprecher 2” verwenden
- Unklarheiten oder Widersprüche explizit markieren als: “Unklar/Widerspruch: …”

Empfohlene Struktur:
1) Titel / Kontext
2) Agenda
3) Leitsymptome / Verlauf (falls vorhanden)
4) Kernthemen (2–4 Folien)
5) Entscheidungen / Beschlüsse
6) Risiken / offene Fragen
7) Empfehlungen
8) Nächste Schritte (Checkliste)

Letzte Folie: “Nächste Schritte” als Checkliste mit:
- To-do
- Owner/Rolle
- Deadline (wenn nicht im Transkript: “TBD”)"""


def slide_deck_prompt() -> str:
    """The fixed generation prompt."""
    return GERMAN_SLIDE_DECK_PROMPT
