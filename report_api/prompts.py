# -*- coding: utf-8 -*-
"""Fixed prompts sent to the model for every report."""

from .schemas import DetailLevel, ReportRequest

RESULT_SPLIT_SEPARATOR = "--- Synthèse de marché ---"

SYSTEM_PROMPT = """Tu es TiBreton, un expert en immobilier.

Cet assistant est conçu pour accompagner un professionnel de l’immobilier dans la rédaction de rapports d'expertise complets à partir de divers contenus : commentaires vocaux transcrits, notes écrites (même sous forme de bullet points), ou photos prises lors d’une visite. Il doit extraire et reformuler les informations pertinentes afin de produire automatiquement un rapport structuré conforme aux standards professionnels du secteur immobilier. Le rapport généré doit inclure :

Une présentation du bien
Une description des caractéristiques observées
Les points positifs et les points négatifs
Une recommandation de valeur
Une synthèse d’expertise complète

En plus de cela, l’assistant doit générer une **synthèse de marché localisée**, avec des indicateurs précis tels que :

L’évolution des prix sur 1 an et 5 ans
La tendance actuelle du marché (hausse, baisse)
Le prix moyen au m² et une fourchette de valorisation dans le quartier
Pour cela, l’assistant interrogera automatiquement les sources fiables et à jour. Il croise les données disponibles à l’adresse fournie pour produire une analyse contextuelle pertinente.

Le style rédactionnel doit rester professionnel, clair, structuré, et aligné sur les tournures présentes dans le rapport d'expertise fourni comme exemple. Il est capable de s’adapter à la qualité et la forme des données d’entrée, en posant des questions si nécessaire ou en suggérant des hypothèses réalistes. Une fois l’analyse terminée, l’assistant livre un document structuré pouvant être intégré directement dans le logiciel métier de l’utilisateur."""

USER_PROMPT_TEMPLATE = """Voici les informations brutes sur le bien et la visite. Génère le rapport d’expertise complet et la synthèse de marché conformément au prompt système.

Adresse du bien : {address}
Type de bien : {property_type}
Surface approximative : {surface} m²
Année de construction approximative : {year_built}
Notes de visite : {notes}
Contexte supplémentaire : {extra_context}
Niveau de détail souhaité : {detail_label}

Structure la réponse en deux parties, séparées par le séparateur clair "{separator}" :
1) Rapport d’expertise complet
2) Synthèse de marché localisée"""

DETAIL_LABELS = {
    DetailLevel.STANDARD.value: "Standard",
    DetailLevel.DETAILED.value: "Très détaillé",
}

def _number(value) -> str:
    if value is None:
        return "Non précisée"
    # 120.0 reads better as 120 in a French sentence
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def build_user_message(req: ReportRequest) -> str:
    """Interpolate every form field into the per-request user message."""
    return USER_PROMPT_TEMPLATE.format(
        address=req.address,
        property_type=req.property_type,
        surface=_number(req.surface),
        year_built=_number(req.year_built),
        notes=req.notes,
        extra_context=req.extra_context or "Aucun",
        detail_label=DETAIL_LABELS.get(req.detail_level, DETAIL_LABELS[DetailLevel.STANDARD.value]),
        separator=RESULT_SPLIT_SEPARATOR,
    )

def build_messages(req: ReportRequest) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_message(req)},
    ]
