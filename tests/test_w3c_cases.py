"""Cases in the shape of the W3C RDF/XML test suite.

Positive cases pair a document with its expected N-Triples and are compared
as graphs, so blank node labels do not matter. Negative cases must raise.
"""

import pytest

from rdfxml_triples.errors import RDFXMLError
from rdfxml_triples.iri import IRI
from rdfxml_triples.isomorphism import isomorphic
from rdfxml_triples.models import RDF_XML_LITERAL, Literal, Triple
from rdfxml_triples.ntriples import parse_document
from rdfxml_triples.rdfxml_parser import parse_rdfxml

TESTS = "http://www.w3.org/2013/RDFXMLTests/"
RDF = 'xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"'
EG = 'xmlns:eg="http://example.org/eg#"'

POSITIVE = {
    "amp-in-url/test001": (
        f"""<rdf:RDF {RDF}>
  <rdf:Description rdf:about="http://example/q?abc=1&amp;def=2">
    <rdf:value>xxx</rdf:value>
  </rdf:Description>
</rdf:RDF>""",
        """<http://example/q?abc=1&def=2> <http://www.w3.org/1999/02/22-rdf-syntax-ns#value> "xxx" .""",
    ),
    "rdf-containers-syntax-vs-schema/test001": (
        f"""<rdf:RDF {RDF}>
  <rdf:Bag>
    <rdf:li>1</rdf:li>
    <rdf:li>2</rdf:li>
  </rdf:Bag>
</rdf:RDF>""",
        """_:bag <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> <http://www.w3.org/1999/02/22-rdf-syntax-ns#Bag> .
_:bag <http://www.w3.org/1999/02/22-rdf-syntax-ns#_1> "1" .
_:bag <http://www.w3.org/1999/02/22-rdf-syntax-ns#_2> "2" .""",
    ),
    "rdfms-empty-property-elements/test001": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description rdf:about="http://example.org/resource1/">
    <eg:pname></eg:pname>
  </rdf:Description>
</rdf:RDF>""",
        """<http://example.org/resource1/> <http://example.org/eg#pname> "" .""",
    ),
    "rdfms-empty-property-elements/test007": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description rdf:about="http://example.org/resource1/">
    <eg:pname eg:attr="val"/>
  </rdf:Description>
</rdf:RDF>""",
        """_:a1 <http://example.org/eg#attr> "val" .
<http://example.org/resource1/> <http://example.org/eg#pname> _:a1 .""",
    ),
    "rdfms-empty-property-elements/test013": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description rdf:about="http://example.org/resource1/">
    <eg:pname rdf:ID="test013"/>
  </rdf:Description>
</rdf:RDF>""",
        """<http://example.org/resource1/> <http://example.org/eg#pname> "" .
<http://www.w3.org/2013/RDFXMLTests/rdfms-empty-property-elements/test013.rdf#test013> <http://www.w3.org/1999/02/22-rdf-syntax-ns#subject> <http://example.org/resource1/> .
<http://www.w3.org/2013/RDFXMLTests/rdfms-empty-property-elements/test013.rdf#test013> <http://www.w3.org/1999/02/22-rdf-syntax-ns#predicate> <http://example.org/eg#pname> .
<http://www.w3.org/2013/RDFXMLTests/rdfms-empty-property-elements/test013.rdf#test013> <http://www.w3.org/1999/02/22-rdf-syntax-ns#object> "" .
<http://www.w3.org/2013/RDFXMLTests/rdfms-empty-property-elements/test013.rdf#test013> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> <http://www.w3.org/1999/02/22-rdf-syntax-ns#Statement> .""",
    ),
    "rdfms-reification-required/test001": (
        f"""<rdf:RDF {RDF} xmlns:foo="http://foo/">
  <rdf:Description rdf:about="http://example.org/">
    <foo:bar rdf:ID="reify">abc</foo:bar>
  </rdf:Description>
</rdf:RDF>""",
        """<http://example.org/> <http://foo/bar> "abc" .
<http://www.w3.org/2013/RDFXMLTests/rdfms-reification-required/test001.rdf#reify> <http://www.w3.org/1999/02/22-rdf-syntax-ns#subject> <http://example.org/> .
<http://www.w3.org/2013/RDFXMLTests/rdfms-reification-required/test001.rdf#reify> <http://www.w3.org/1999/02/22-rdf-syntax-ns#predicate> <http://foo/bar> .
<http://www.w3.org/2013/RDFXMLTests/rdfms-reification-required/test001.rdf#reify> <http://www.w3.org/1999/02/22-rdf-syntax-ns#object> "abc" .
<http://www.w3.org/2013/RDFXMLTests/rdfms-reification-required/test001.rdf#reify> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> <http://www.w3.org/1999/02/22-rdf-syntax-ns#Statement> .""",
    ),
    "rdfms-syntax-incomplete/test001": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description rdf:nodeID="a">
    <eg:property rdf:nodeID="a" />
  </rdf:Description>
</rdf:RDF>""",
        """_:x <http://example.org/eg#property> _:x .""",
    ),
    "rdfms-identity-anon-resources/test001": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description>
    <eg:property>property value</eg:property>
  </rdf:Description>
</rdf:RDF>""",
        """_:j0 <http://example.org/eg#property> "property value" .""",
    ),
    "xmlbase/test002": (
        f"""<rdf:RDF {RDF} xmlns:eg="http://example.org/" xml:base="http://example.org/dir/file">
  <eg:type rdf:about="relfile" />
  <eg:type rdf:about="../relfile" />
  <eg:type rdf:ID="frag" />
</rdf:RDF>""",
        """<http://example.org/dir/relfile> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> <http://example.org/type> .
<http://example.org/relfile> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> <http://example.org/type> .
<http://example.org/dir/file#frag> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> <http://example.org/type> .""",
    ),
    "rdfms-seq-representation/test001": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description rdf:about="http://example.org/basket">
    <eg:hasFruit rdf:parseType="Collection">
      <rdf:Description rdf:about="http://example.org/banana"/>
      <rdf:Description rdf:about="http://example.org/apple"/>
    </eg:hasFruit>
  </rdf:Description>
</rdf:RDF>""",
        """<http://example.org/basket> <http://example.org/eg#hasFruit> _:l1 .
_:l1 <http://www.w3.org/1999/02/22-rdf-syntax-ns#first> <http://example.org/banana> .
_:l1 <http://www.w3.org/1999/02/22-rdf-syntax-ns#rest> _:l2 .
_:l2 <http://www.w3.org/1999/02/22-rdf-syntax-ns#first> <http://example.org/apple> .
_:l2 <http://www.w3.org/1999/02/22-rdf-syntax-ns#rest> <http://www.w3.org/1999/02/22-rdf-syntax-ns#nil> .""",
    ),
    "rdfms-xmllang/test003": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description rdf:about="http://example.org/node" xml:lang="fr">
    <eg:property>chat</eg:property>
  </rdf:Description>
</rdf:RDF>""",
        """<http://example.org/node> <http://example.org/eg#property> "chat"@fr .""",
    ),
    "datatypes/test001": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description rdf:about="http://example.org/foo">
    <eg:bar rdf:datatype="http://www.w3.org/2001/XMLSchema#integer"> 10 </eg:bar>
  </rdf:Description>
</rdf:RDF>""",
        """<http://example.org/foo> <http://example.org/eg#bar> " 10 "^^<http://www.w3.org/2001/XMLSchema#integer> .""",
    ),
    "rdfms-parsetype-resource/test002": (
        f"""<rdf:RDF {RDF} {EG}>
  <rdf:Description rdf:about="http://example.org/a">
    <eg:b rdf:parseType="Resource">
      <eg:c>d</eg:c>
      <eg:e rdf:parseType="Resource"/>
    </eg:b>
  </rdf:Description>
</rdf:RDF>""",
        """<http://example.org/a> <http://example.org/eg#b> _:n1 .
_:n1 <http://example.org/eg#c> "d" .
_:n1 <http://example.org/eg#e> _:n2 .""",
    ),
}


@pytest.mark.parametrize("name", sorted(POSITIVE))
def test_positive_case(name):
    document, expected = POSITIVE[name]
    triples = parse_rdfxml(document, base_url=f"{TESTS}{name}.rdf")
    assert isomorphic(triples, parse_document(expected)), "\n".join(str(t) for t in triples)


def test_xml_literal_namespaces():
    document = (
        f'<rdf:RDF {RDF} xmlns:html="http://NoHTML.example.org" xmlns:my="http://my.example.org/">\n'
        '  <rdf:Description rdf:ID="John_Smith">\n'
        '    <my:Name rdf:parseType="Literal">\n'
        "      <html:h1>\n"
        "        <b>John</b>\n"
        "      </html:h1>\n"
        "   </my:Name>\n"
        "  </rdf:Description>\n"
        "</rdf:RDF>"
    )
    base = f"{TESTS}rdfms-xml-literal-namespaces/test001.rdf"
    expected = Literal.typed(
        "\n      "
        '<html:h1 xmlns:html="http://NoHTML.example.org">\n'
        "        <b>John</b>\n"
        "      </html:h1>\n"
        "   ",
        RDF_XML_LITERAL,
    )
    assert parse_rdfxml(document, base_url=base) == [
        Triple(IRI(f"{base}#John_Smith"), IRI("http://my.example.org/Name"), expected)
    ]


NEGATIVE = {
    "rdfms-rdf-names-use/error-001": "<rdf:RDF/>",
    "rdfms-rdf-names-use/error-002": "<rdf:ID/>",
    "rdfms-rdf-names-use/error-011": '<rdf:Description rdf:about="http://example.org/"><rdf:Description/></rdf:Description>',
    "rdfms-rdf-names-use/error-020": '<rdf:Description rdf:about="http://example.org/" rdf:li="x"/>',
    "rdfms-rdf-id/error001": '<rdf:Description rdf:ID="333-555-666"/>',
    "rdfms-rdf-id/error002": '<rdf:Description rdf:ID="_:xx"/>',
    "rdfms-rdf-id/error003": '<rdf:Description><eg:prop rdf:ID="333-555-666"/></rdf:Description>',
    "rdfms-rdf-id/error005": '<rdf:Description rdf:bagID="a"/>',
    "rdfms-abouteach/error001": '<rdf:Description rdf:aboutEach="#a"/>',
    "rdfms-abouteach/error002": '<rdf:Description rdf:aboutEachPrefix="http://example.org/"/>',
    "rdfms-syntax-incomplete/error001": '<rdf:Description rdf:nodeID="333-555-666"/>',
    "rdfms-syntax-incomplete/error004": '<rdf:Description rdf:nodeID="j0" rdf:about="http://example.org/"/>',
    "rdfms-syntax-incomplete/error006": '<rdf:Description><eg:property rdf:nodeID="j0" rdf:resource="bar"/></rdf:Description>',
    "rdfms-empty-property-elements/error001": '<rdf:Description><eg:p rdf:parseType="Literal" rdf:resource="x"/></rdf:Description>',
    "rdfms-empty-property-elements/error002": '<rdf:Description><eg:p rdf:parseType="Resource" rdf:resource="x"/></rdf:Description>',
    "rdfms-parsetype-collection/error001": '<rdf:Description><eg:p rdf:parseType="Collection">text</eg:p></rdf:Description>',
    "rdfms-duplicate-id/error001": '<rdf:Description rdf:ID="dup" eg:p="1"/><rdf:Description rdf:ID="dup" eg:p="2"/>',
}


@pytest.mark.parametrize("name", sorted(NEGATIVE))
def test_negative_case(name):
    document = f"<rdf:RDF {RDF} {EG}>{NEGATIVE[name]}</rdf:RDF>"
    with pytest.raises(RDFXMLError):
        parse_rdfxml(document, base_url=f"{TESTS}{name}.rdf")
