from .descriptor import SchemaDescriptor

_DIMENSION = {
    "type": "object",
    "properties": {
        "score": {"type": "number", "minimum": 1, "maximum": 10},
        "reasoning": {"type": "string"}
    }
}

ANALYSIS_SCHEMA = {
  "type": "object",
  "properties": {
    "businessModel": {"type": "string"},
    "revenueStream": {"type": "string"},
    "targetMarket": {"type": "string"},
    "scoreDetails": {
      "type": "object",
      "properties": {
        "technicalComplexity": _DIMENSION,
        "marketOpportunity": _DIMENSION,
        "competitiveLandscape": _DIMENSION,
        "resourceRequirements": _DIMENSION,
        "timeToMarket": _DIMENSION
      }
    },
    "aiInsights": {
      "type": "object",
      "properties": {
        "keyInsight": {"type": "string"},
        "riskFactor": {"type": "string"},
        "opportunity": {"type": "string"}
      }
    }
  }
}

SEARCH_SCHEMA = {
  "type": "object",
  "properties": {
    "businesses": {
      "type": "array",
      "items": {
        "type": "object",
        "properties": {
          "name": {"type": "string"},
          "url": {"type": "string"},
          "description": {"type": "string"},
          "businessModel": {"type": "string"},
          "estimatedScore": {"type": "number"}
        }
      }
    }
  }
}

_STRINGS = {"type": "array", "items": {"type": "string"}}
_LEVEL = {"type": "string", "enum": ["Low", "Medium", "High"]}

STAGE_SCHEMAS = {
  2: {
    "type": "object",
    "properties": {
      "recommendation": {"type": "string", "enum": ["PROCEED", "MODIFY", "SKIP"]},
      "effortScore": {"type": "number", "minimum": 1, "maximum": 10},
      "rewardScore": {"type": "number", "minimum": 1, "maximum": 10},
      "effortBreakdown": {
        "type": "object",
        "properties": {
          "technical": {"type": "number"},
          "marketing": {"type": "number"},
          "operational": {"type": "number"},
          "financial": {"type": "number"}
        }
      },
      "reasoning": {"type": "string"},
      "modifications": _STRINGS,
      "shortcuts": _STRINGS,
      "toolsToLeverage": _STRINGS,
      "riskMitigation": _STRINGS
    }
  },
  3: {
    "type": "object",
    "properties": {
      "coreFeatures": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "name": {"type": "string"},
            "priority": {"type": "string", "enum": ["Must Have", "Should Have", "Nice to Have"]},
            "effort": _LEVEL,
            "value": _LEVEL
          }
        }
      },
      "techStack": {
        "type": "object",
        "properties": {
          "frontend": _STRINGS,
          "backend": _STRINGS,
          "database": _STRINGS,
          "infrastructure": _STRINGS,
          "thirdPartyServices": _STRINGS
        }
      },
      "timeline": {
        "type": "object",
        "properties": {
          "total": {"type": "string"},
          "phases": {
            "type": "array",
            "items": {
              "type": "object",
              "properties": {
                "name": {"type": "string"},
                "duration": {"type": "string"},
                "deliverables": _STRINGS
              }
            }
          }
        }
      },
      "teamRequirements": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "role": {"type": "string"},
            "level": {"type": "string"},
            "commitment": {"type": "string"},
            "cost": {"type": "string"}
          }
        }
      },
      "budgetBreakdown": {
        "type": "object",
        "properties": {
          "development": {"type": "string"},
          "infrastructure": {"type": "string"},
          "marketing": {"type": "string"},
          "operations": {"type": "string"},
          "buffer": {"type": "string"},
          "total": {"type": "string"}
        }
      },
      "validationMetrics": _STRINGS,
      "launchStrategy": {"type": "string"}
    }
  },
  4: {
    "type": "object",
    "properties": {
      "validationMethods": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "method": {"type": "string"},
            "timeline": {"type": "string"},
            "cost": {"type": "string"},
            "expectedOutcome": {"type": "string"}
          }
        }
      },
      "landingPageStrategy": {
        "type": "object",
        "properties": {
          "variants": _STRINGS,
          "copyTesting": _STRINGS,
          "conversionTargets": {"type": "string"}
        }
      },
      "betaProgram": {
        "type": "object",
        "properties": {
          "targetUsers": {"type": "number"},
          "acquisitionChannels": _STRINGS,
          "incentives": _STRINGS,
          "feedbackMethods": _STRINGS
        }
      },
      "pricingTests": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "model": {"type": "string"},
            "pricePoints": _STRINGS,
            "testMethod": {"type": "string"}
          }
        }
      },
      "successMetrics": {
        "type": "object",
        "properties": {
          "northStar": {"type": "string"},
          "leading": _STRINGS,
          "lagging": _STRINGS,
          "targets": {"type": "object"}
        }
      },
      "pivotIndicators": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "indicator": {"type": "string"},
            "threshold": {"type": "string"},
            "action": {"type": "string"}
          }
        }
      }
    }
  },
  5: {
    "type": "object",
    "properties": {
      "growthStrategies": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "strategy": {"type": "string"},
            "timeline": {"type": "string"},
            "investment": {"type": "string"},
            "expectedROI": {"type": "string"}
          }
        }
      },
      "acquisitionChannels": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "channel": {"type": "string"},
            "CAC": {"type": "string"},
            "scalability": _LEVEL,
            "priority": {"type": "number"}
          }
        }
      },
      "retentionStrategies": _STRINGS,
      "productRoadmap": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "quarter": {"type": "string"},
            "features": _STRINGS,
            "objectives": _STRINGS
          }
        }
      },
      "teamScaling": {
        "type": "object",
        "properties": {
          "currentSize": {"type": "number"},
          "sixMonthTarget": {"type": "number"},
          "twelveMonthTarget": {"type": "number"},
          "keyHires": _STRINGS
        }
      },
      "infrastructure": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "component": {"type": "string"},
            "currentState": {"type": "string"},
            "targetState": {"type": "string"},
            "timeline": {"type": "string"}
          }
        }
      },
      "positioning": {
        "type": "object",
        "properties": {
          "uniqueValue": {"type": "string"},
          "competitiveDifferentiators": _STRINGS,
          "messaging": {"type": "string"}
        }
      },
      "financialProjections": {
        "type": "object",
        "properties": {
          "sixMonthRevenue": {"type": "string"},
          "twelveMonthRevenue": {"type": "string"},
          "burnRate": {"type": "string"},
          "profitabilityTimeline": {"type": "string"}
        }
      }
    }
  },
  6: {
    "type": "object",
    "properties": {
      "customerServiceAI": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "solution": {"type": "string"},
            "implementation": {"type": "string"},
            "cost": {"type": "string"},
            "timeToValue": {"type": "string"}
          }
        }
      },
      "marketingAutomation": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "solution": {"type": "string"},
            "useCase": {"type": "string"},
            "expectedImpact": {"type": "string"}
          }
        }
      },
      "operationsAI": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "process": {"type": "string"},
            "automationApproach": {"type": "string"},
            "efficiencyGain": {"type": "string"}
          }
        }
      },
      "productFeatureAI": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "feature": {"type": "string"},
            "aiEnhancement": {"type": "string"},
            "userValue": {"type": "string"},
            "complexity": _LEVEL
          }
        }
      },
      "dataAnalysisAI": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "analysisType": {"type": "string"},
            "dataSource": {"type": "string"},
            "insights": {"type": "string"},
            "businessImpact": {"type": "string"}
          }
        }
      },
      "implementationRoadmap": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "phase": {"type": "string"},
            "timeline": {"type": "string"},
            "initiatives": _STRINGS,
            "investment": {"type": "string"}
          }
        }
      },
      "roiProjections": {
        "type": "object",
        "properties": {
          "costSavings": {"type": "string"},
          "revenueIncrease": {"type": "string"},
          "efficiencyGains": {"type": "string"},
          "paybackPeriod": {"type": "string"}
        }
      },
      "buildVsBuy": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "capability": {"type": "string"},
            "recommendation": {"type": "string", "enum": ["Build", "Buy", "Partner"]},
            "rationale": {"type": "string"}
          }
        }
      }
    }
  }
}

ANALYSIS_DESCRIPTOR = SchemaDescriptor.from_json_schema(ANALYSIS_SCHEMA)
SEARCH_DESCRIPTOR = SchemaDescriptor.from_json_schema(SEARCH_SCHEMA)
STAGE_DESCRIPTORS = {
    stage: SchemaDescriptor.from_json_schema(schema)
    for stage, schema in STAGE_SCHEMAS.items()
}
