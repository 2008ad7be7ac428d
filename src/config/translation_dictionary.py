"""English <-> Romanian phrase tables for the dictionary translator.

Pairs are written once as ``(english, romanian)`` and inverted for the
Romanian -> English direction; when several English phrases share one
Romanian rendering, the first listed wins on the way back.  Ordering inside
a table does not matter for matching: the translator always tries the
longest phrase first.

The tables are data only.  Swapping in a real translation API means adding
an ``ITranslationProvider``, not editing this file.
"""

from __future__ import annotations

from src.config.domain_knowledge import DEFAULT_TEMPLATE, DESCRIPTION_TEMPLATES

# Event vocabulary: titles, descriptions, template fragments.
PHRASES: tuple[tuple[str, str], ...] = (
    # titles seen in the local feeds
    ("Jazz Night", "Seară de Jazz"),
    ("Art Exhibition", "Expoziție de Artă"),
    ("Food Festival", "Festival Culinar"),
    ("Banat Flavors", "Arome Bănățene"),
    ("Theater Performance", "Spectacol de Teatru"),
    ("Tech Meetup", "Întâlnire Tech"),
    ("Web Development", "Dezvoltare Web"),
    ("Christmas Market Opening", "Deschiderea Târgului de Crăciun"),
    ("Christmas Market", "Târgul de Crăciun"),
    ("City Council", "Consiliul Local"),
    ("Public Session", "Ședință Publică"),
    ("City Day", "Ziua Orașului"),
    ("Rock Concert", "Concert Rock"),
    ("Old Town", "Orașul Vechi"),
    ("Contemporary", "Contemporan"),
    # common nouns
    ("Exhibition", "Expoziție"),
    ("Festival", "Festival"),
    ("Theater", "Teatru"),
    ("Theatre", "Teatru"),
    ("Music", "Muzică"),
    ("Workshop", "Atelier"),
    ("Market", "Târg"),
    ("Opening", "Deschidere"),
    ("Night", "Noapte"),
    ("Evening", "Seară"),
    ("Performance", "Spectacol"),
    ("Meetup", "Întâlnire"),
    ("Conference", "Conferință"),
    ("Dance", "Dans"),
    ("Film", "Film"),
    ("Live", "Live"),
    ("Local", "Local"),
    ("Artists", "Artiști"),
    ("Traditional", "Tradițional"),
    ("Annual", "Anual"),
    ("Monthly", "Lunar"),
    ("Classic", "Clasic"),
    # connectives
    ("at", "la"),
    ("in", "în"),
    ("and", "și"),
    ("with", "cu"),
    ("for", "pentru"),
    ("from", "din"),
    # description sentence fragments
    ("Located in", "Situat în"),
    (
        "this event showcases the vibrant spirit of Timișoara's cultural scene",
        "acest eveniment reflectă spiritul vibrant al scenei culturale din Timișoara",
    ),
    *(
        (template["en"], template["ro"])
        for template in (*DESCRIPTION_TEMPLATES.values(), DEFAULT_TEMPLATE)
    ),
)

# Whole-field venue names.  Matched exactly (case-insensitive) before any
# phrase substitution is attempted.
LOCATIONS: tuple[tuple[str, str], ...] = (
    ("Union Square", "Piața Unirii"),
    ("Victory Square", "Piața Victoriei"),
    ("Liberty Square", "Piața Libertății"),
    ("Historic Center", "Centrul Istoric"),
    ("Timișoara City Hall", "Primăria Timișoara"),
    ("Art Museum", "Muzeul de Artă"),
    ("National Theatre", "Teatrul Național"),
    ("UVT Campus", "Campusul UVT"),
    ("Banat Village Museum", "Muzeul Satului Bănățean"),
    ("Rose Park", "Parcul Rozelor"),
)

# Ticket-price vocabulary.
PRICES: tuple[tuple[str, str], ...] = (
    ("Free entry", "Intrare liberă"),
    ("Free", "Gratuit"),
    ("Donation", "Donație"),
    ("Sold out", "Epuizat"),
    ("per person", "de persoană"),
    ("from", "de la"),
)
