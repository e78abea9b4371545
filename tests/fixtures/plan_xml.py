"""
Sample meal plan documents for decoder and service tests.
"""

PLAN_XML = """<?xml version="1.0" encoding="UTF-8"?>
<plan>
  <ort id="610">
    <mensa>Mensa Rempartstraße</mensa>
    <tagesplan datum="22.05.2023">
      <menue>
        <art>Essen 1</art>
        <zusatz>vegan</zusatz>
        <name>Linsencurry mit Reis</name>
        <preis studierende="3,50" angestellte="5,90" gaeste="7,40" schueler="4,05"/>
      </menue>
      <menue>
        <art>Essen 2</art>
        <name>Schnitzel mit Pommes</name>
        <preis studierende="4,20" angestellte="6,60" gaeste="8,10" schueler="4,75"/>
      </menue>
    </tagesplan>
    <tagesplan datum="23.05.2023">
      <menue>
        <art>Essen 1</art>
        <name>Gemüselasagne</name>
        <preis studierende="3,50" angestellte="5,90" gaeste="7,40" schueler="4,05"/>
      </menue>
    </tagesplan>
  </ort>
</plan>
"""

SINGLE_DAY_XML = """<plan>
  <ort id="610">
    <mensa>Mensa Rempartstraße</mensa>
    <tagesplan datum="23.05.2023">
      <menue>
        <art>Essen 1</art>
        <zusatz>vegetarisch</zusatz>
        <name>Käsespätzle</name>
        <preis studierende="3,50" angestellte="5,90" gaeste="7,40" schueler="4,05"/>
      </menue>
      <menue>
        <art>Essen 2</art>
        <name>Hähnchen mit Reis</name>
        <preis studierende="4,20" angestellte="6,60" gaeste="8,10" schueler="4,75"/>
      </menue>
    </tagesplan>
  </ort>
</plan>
"""

LEGACY_PLAN_XML = """<plan>
  <ort id="620">
    <mensa>Mensa Institutsviertel
      <tagesplan datum="24.05.2023">
        <menue>
          <art>Tagesgericht</art>
          <name>Chili sin Carne</name>
          <preis studierende="3,10" angestellte="5,20" gaeste="6,90" schueler="3,80"/>
        </menue>
      </tagesplan>
    </mensa>
  </ort>
</plan>
"""

MISSING_PRICE_XML = """<plan>
  <ort id="610">
    <mensa>Mensa Rempartstraße</mensa>
    <tagesplan datum="23.05.2023">
      <menue>
        <art>Essen 1</art>
        <name>Käsespätzle</name>
      </menue>
    </tagesplan>
  </ort>
</plan>
"""


def plan_for(place_id: str, mensa: str = "Mensa") -> str:
    """Minimal one-day plan for a given place identifier."""
    return f"""<plan>
  <ort id="{place_id}">
    <mensa>{mensa}</mensa>
    <tagesplan datum="26.05.2023">
      <menue>
        <art>Essen 1</art>
        <name>Pasta</name>
        <preis studierende="3,00" angestellte="5,00" gaeste="7,00" schueler="3,50"/>
      </menue>
    </tagesplan>
  </ort>
</plan>
"""
