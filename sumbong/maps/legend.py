"""
Category legend for the incident map.
"""

from typing import Iterable, Optional
import logging

import folium

from ..reports.categories import CRIME_CATEGORIES, CrimeCategory, category_label

logger = logging.getLogger(__name__)


class LegendGenerator:
    """Generates the category legend shown on the map."""

    def __init__(self):
        self.legend_template = """
        <div style="position: fixed;
                    bottom: 30px; left: 30px; width: 170px; height: auto;
                    background-color: white; border:2px solid grey; z-index:9999;
                    font-size:12px; padding: 10px; border-radius: 5px;
                    box-shadow: 0 2px 4px rgba(0,0,0,0.2);">
        <h4 style="margin: 0 0 10px 0; font-size: 14px; color: #333;">{title}</h4>
        {content}
        </div>
        """

    def create_legend(self, title: str = "Incident Types",
                      categories: Iterable[CrimeCategory] = CRIME_CATEGORIES,
                      selected: Optional[Iterable[str]] = None) -> str:
        """
        Create HTML legend with one color swatch per category.

        Args:
            title: Legend title
            categories: Categories to list, in display order
            selected: Active category filter; listed under the swatches

        Returns:
            HTML string for legend
        """
        content = ""
        for category in categories:
            content += f"""
            <div style="margin: 3px 0; display: flex; align-items: center;">
                <span style="background-color: {category.color}; width: 14px; height: 14px;
                           display: inline-block; margin-right: 8px; border-radius: 50%;
                           border: 1px solid #333;"></span>
                <span style="font-size: 11px;">{category.label}</span>
            </div>
            """

        if selected:
            labels = sorted(category_label(key) for key in selected)
            content += '<hr style="margin: 8px 0; border: none; border-top: 1px solid #ddd;">'
            content += f'<div style="font-size: 10px; color: #666;">Showing: {", ".join(labels)}</div>'

        return self.legend_template.format(title=title, content=content)

    def add_legend_to_map(self, map_obj: folium.Map, legend_html: str,
                          previous: Optional[folium.Element] = None) -> folium.Element:
        """
        Add legend HTML to the map document.

        Args:
            map_obj: Folium Map object
            legend_html: HTML legend content
            previous: Legend element added earlier, removed first

        Returns:
            The added legend element
        """
        html_root = map_obj.get_root().html
        if previous is not None:
            html_root._children.pop(previous.get_name(), None)

        element = folium.Element(legend_html)
        html_root.add_child(element)
        logger.debug("Updated map legend")
        return element
